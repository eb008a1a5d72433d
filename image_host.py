"""
image_host.py
Member photo upload to imgbb; returns the public image URL.
"""

from __future__ import annotations

import logging

import requests

import config

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024


class UploadError(Exception):
    pass


def upload_image(data: bytes, filename: str = "photo.jpg") -> str:
    if not config.IMGBB_API_KEY:
        raise UploadError("ছবি আপলোডের জন্য API Key পাওয়া যায়নি। ডেভেলপারের সাথে যোগাযোগ করুন।")
    if len(data) > MAX_IMAGE_BYTES:
        raise UploadError("ছবির সাইজ অনেক বড়! ৫ MB এর নিচের ছবি দিন।")

    try:
        r = requests.post(
            config.IMGBB_UPLOAD_URL,
            params={"key": config.IMGBB_API_KEY},
            files={"image": (filename, data)},
        )
        result = r.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("Image upload failed: %s", exc)
        raise UploadError("ছবি আপলোড করতে সমস্যা হয়েছে। আবার চেষ্টা করুন।") from exc

    if not result.get("success"):
        logger.error("Image host rejected upload: %s", result.get("error"))
        raise UploadError("ছবি আপলোড করতে সমস্যা হয়েছে। আবার চেষ্টা করুন।")
    url = result["data"]["url"]
    logger.info("Uploaded image %s -> %s", filename, url)
    return url
