from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import requests

import ai_service
import image_host


@pytest.fixture
def gemini_key(monkeypatch):
    monkeypatch.setattr(ai_service.config, "GEMINI_API_KEY", "test-key")


def fake_client(text=None, error=None):
    client = MagicMock()
    if error:
        client.models.generate_content.side_effect = error
    else:
        client.models.generate_content.return_value = SimpleNamespace(text=text)
    return client


def test_insight_returns_model_text(gemini_key):
    with patch.object(ai_service.genai, "Client", return_value=fake_client("ভালো চলছে")):
        assert ai_service.financial_insight(10, 5000, [{"d": "Tea", "a": 100}]) == "ভালো চলছে"


def test_insight_falls_back_on_error(gemini_key):
    with patch.object(ai_service.genai, "Client", return_value=fake_client(error=RuntimeError("quota"))):
        assert ai_service.financial_insight(10, 5000, []) == ai_service.INSIGHT_FALLBACK


def test_insight_without_key_uses_fallback(monkeypatch):
    monkeypatch.setattr(ai_service.config, "GEMINI_API_KEY", "")
    with patch.object(ai_service.genai, "Client") as client:
        assert ai_service.financial_insight(1, 0, []) == ai_service.INSIGHT_FALLBACK
    client.assert_not_called()


def test_quote_strips_quotes(gemini_key):
    with patch.object(ai_service.genai, "Client", return_value=fake_client('"দান কবুল হোক"')):
        assert ai_service.motivational_quote("Karim") == "দান কবুল হোক"


def test_quote_empty_answer_falls_back(gemini_key):
    with patch.object(ai_service.genai, "Client", return_value=fake_client(None)):
        assert ai_service.motivational_quote("Karim") == ai_service.QUOTE_FALLBACK


@pytest.fixture
def imgbb_key(monkeypatch):
    monkeypatch.setattr(image_host.config, "IMGBB_API_KEY", "img-key")


def test_upload_returns_url(imgbb_key):
    response = MagicMock()
    response.json.return_value = {"success": True, "data": {"url": "https://i.ibb.co/x.jpg"}}
    with patch.object(image_host.requests, "post", return_value=response) as post:
        assert image_host.upload_image(b"jpegdata", "x.jpg") == "https://i.ibb.co/x.jpg"
    assert post.call_args.kwargs["params"] == {"key": "img-key"}


def test_upload_rejects_big_files_before_request(imgbb_key):
    with patch.object(image_host.requests, "post") as post:
        with pytest.raises(image_host.UploadError):
            image_host.upload_image(b"x" * (image_host.MAX_IMAGE_BYTES + 1))
    post.assert_not_called()


def test_upload_requires_key(monkeypatch):
    monkeypatch.setattr(image_host.config, "IMGBB_API_KEY", "")
    with pytest.raises(image_host.UploadError):
        image_host.upload_image(b"x")


def test_upload_network_error(imgbb_key):
    with patch.object(image_host.requests, "post", side_effect=requests.ConnectionError("down")):
        with pytest.raises(image_host.UploadError):
            image_host.upload_image(b"x")


def test_upload_host_failure(imgbb_key):
    response = MagicMock()
    response.json.return_value = {"success": False, "error": {"message": "bad"}}
    with patch.object(image_host.requests, "post", return_value=response):
        with pytest.raises(image_host.UploadError):
            image_host.upload_image(b"x")
