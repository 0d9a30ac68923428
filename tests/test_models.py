"""Tests for asknote.models and asknote.config."""
import pytest
from pydantic import ValidationError

from asknote.config import DEFAULT_CHAT_MODEL, load_settings
from asknote.models.document_text import ContextSelection, DocumentText, PageContent


def test_page_content_rejects_bad_values() -> None:
    with pytest.raises(ValidationError):
        PageContent(page_number=0, text="x")
    with pytest.raises(ValidationError):
        PageContent(page_number=1, text="   ")


def test_document_text_requires_increasing_pages() -> None:
    pages = [PageContent(page_number=2, text="b"), PageContent(page_number=1, text="a")]
    with pytest.raises(ValidationError):
        DocumentText.from_pages(pages)


def test_document_text_is_immutable() -> None:
    doc = DocumentText.from_pages([PageContent(page_number=1, text="a")])
    with pytest.raises(ValidationError):
        doc.full_text = "changed"


def test_empty_document_has_no_text() -> None:
    assert not DocumentText.empty().has_text


def test_context_selection_sorts_and_dedupes_pages() -> None:
    assert ContextSelection(context="c", pages=[5, 2, 5, 1]).pages == [1, 2, 5]


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GOOGLE_API_KEY", "CHAT_MODEL", "ASKNOTE_ANSWER_TEMPERATURE", "ASKNOTE_TONE_TEMPERATURE",
        "ASKNOTE_REQUEST_TIMEOUT", "ASKNOTE_MAX_RETRIES", "ASKNOTE_TONE_ROUTING",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()
    assert settings.chat_model == DEFAULT_CHAT_MODEL
    assert settings.answer_temperature == 0.7
    assert settings.max_retries == 1
    assert settings.tone_routing is False


def test_load_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "key")
    monkeypatch.setenv("CHAT_MODEL", "gemini-other")
    monkeypatch.setenv("ASKNOTE_REQUEST_TIMEOUT", "15")
    monkeypatch.setenv("ASKNOTE_TONE_ROUTING", "true")

    settings = load_settings()
    assert settings.google_api_key == "key"
    assert settings.chat_model == "gemini-other"
    assert settings.request_timeout_seconds == 15.0
    assert settings.tone_routing is True


def test_invalid_temperature_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASKNOTE_ANSWER_TEMPERATURE", "5")
    with pytest.raises(ValidationError):
        load_settings()
