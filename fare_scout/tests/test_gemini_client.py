from unittest.mock import patch, Mock

import pytest

from fare_scout.config import get_settings
from fare_scout.gemini_client import GeminiClient, GeminiClientError


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "x")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_payload():
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [
                        {"text": "Resumen:\n"},
                        {"text": "CHART_DATA: Ene 15 | 400"},
                    ],
                }
            }
        ]
    }


@patch("requests.post")
def test_generate(mock_post):
    mock_resp = Mock(status_code=200)
    mock_resp.json.return_value = make_payload()
    mock_post.return_value = mock_resp

    client = GeminiClient(model="gemini-test")
    text = client.generate("find flights")

    assert text == "Resumen:\nCHART_DATA: Ene 15 | 400"
    args, kwargs = mock_post.call_args
    assert args[0].endswith("/models/gemini-test:generateContent")
    assert kwargs["headers"] == {"x-goog-api-key": "x"}
    assert kwargs["json"]["contents"][0]["parts"][0]["text"] == "find flights"
    assert kwargs["json"]["tools"] == [{"google_search": {}}]
    assert kwargs["timeout"] == 60.0


@patch("requests.post")
def test_generate_without_candidates(mock_post):
    mock_resp = Mock(status_code=200)
    mock_resp.json.return_value = {"candidates": []}
    mock_post.return_value = mock_resp

    assert GeminiClient().generate("p") == ""


@patch("requests.post")
def test_http_error(mock_post):
    mock_post.return_value = Mock(status_code=503, text="Service Unavailable")

    with pytest.raises(GeminiClientError, match="HTTP 503"):
        GeminiClient().generate("p")


@patch("requests.post")
def test_api_error_payload(mock_post):
    mock_resp = Mock(status_code=200)
    mock_resp.json.return_value = {"error": {"message": "quota"}}
    mock_post.return_value = mock_resp

    with pytest.raises(GeminiClientError, match="API error"):
        GeminiClient().generate("p")


@patch("requests.post")
def test_missing_api_key(mock_post, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    get_settings.cache_clear()

    with pytest.raises(GeminiClientError, match="GEMINI_API_KEY"):
        GeminiClient().generate("p")
    mock_post.assert_not_called()
