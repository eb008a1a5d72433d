"""
ai_service.py
Gemini-generated dashboard insight and donor quote, with fixed Bengali fallbacks.
"""

from __future__ import annotations

import json
import logging

from google import genai

import config

logger = logging.getLogger(__name__)

INSIGHT_FALLBACK = (
    "তহবিল ব্যবস্থাপনায় স্বচ্ছতা ও প্রবাসীদের অবদান গ্রামের উন্নয়নে মাইলফলক। "
    "নিয়মিত অডিট ও হিসাব সংরক্ষণের মাধ্যমে তহবিল সমৃদ্ধ হবে।"
)
QUOTE_FALLBACK = (
    "আপনার এই দান সদকায়ে জারিয়া হিসেবে কবুল হোক। "
    "গ্রামের নিরাপত্তায় আপনার অবদান মহান আল্লাহ উত্তম প্রতিদান হিসেবে দান করুন।"
)

INSIGHT_SYSTEM = (
    "You are a village financial mentor. Speak in polite, clear, and very concise Bengali. "
    "Focus on community growth and security."
)
QUOTE_SYSTEM = "Write a 1-line beautiful Bengali quote about charity and Allah's reward. No intro, no extra text."


def _generate(prompt: str, system_instruction: str) -> str:
    if not config.GEMINI_API_KEY:
        raise RuntimeError("GEMINI_API_KEY missing")
    client = genai.Client(api_key=config.GEMINI_API_KEY)
    response = client.models.generate_content(
        model=config.GEMINI_MODEL,
        contents=prompt,
        config={"system_instruction": system_instruction},
    )
    return (response.text or "").strip()


def financial_insight(member_count: int, balance: float, recent_expenses: list[dict]) -> str:
    """
    Short (max ~40 words) Bengali summary of the fund. Never raises.
    `recent_expenses` is a list like [{"d": description, "a": amount}, ...].
    """
    prompt = (
        f"আমরা একটি কালিপুর গ্রামের পাহারাদার কল্যাণ ট্রাস্ট চালাই। আমাদের {member_count} জন প্রবাসী সদস্য আছেন "
        f"যারা চাঁদা দেন। বর্তমান তহবিলের ব্যালেন্স ৳{balance:g}। আমাদের সাম্প্রতিক কিছু খরচ: "
        f"{json.dumps(recent_expenses, ensure_ascii=False)}। আমাদের জন্য বাংলায় একটি অত্যন্ত ছোট ও প্রফেশনাল "
        "আর্থিক সামারি বা পরামর্শ দাও (সর্বোচ্চ ৪০ শব্দ)। কথাগুলো যেন উৎসাহব্যঞ্জক হয়।"
    )
    try:
        text = _generate(prompt, INSIGHT_SYSTEM)
    except Exception as exc:
        logger.warning("AI insight unavailable, using fallback: %s", exc)
        return INSIGHT_FALLBACK
    return text or INSIGHT_FALLBACK


def motivational_quote(member_name: str) -> str:
    """One-line thank-you quote for a donor's receipt. Never raises."""
    prompt = (
        f"সদস্যের নাম: {member_name}। কালিপুর গ্রামের পাহারাদার কল্যাণ তহবিলে উনার অবদানের জন্য ধন্যবাদ জানিয়ে "
        "ইসলামী মূল্যবোধের (সদকা/নেকি) আলোকে সর্বোচ্চ ১-২ লাইনের একটি হৃদয়স্পর্শী উক্তি দাও। শুধু উক্তিটি লিখবে।"
    )
    try:
        text = _generate(prompt, QUOTE_SYSTEM)
    except Exception as exc:
        logger.warning("AI quote unavailable, using fallback: %s", exc)
        return QUOTE_FALLBACK
    return text.strip("\"'").strip() or QUOTE_FALLBACK
