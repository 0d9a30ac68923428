"""Tests for asknote.tools.llm_client."""
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors

from asknote.config import Settings
from asknote.errors import RemoteServiceError
from asknote.tools import llm_client
from asknote.tools.llm_client import GeminiChat, is_retryable


class _FakeModels:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return SimpleNamespace(text=outcome)


class _FakeClient:
    def __init__(self, *outcomes):
        self.models = _FakeModels(outcomes)


def _chat(client: _FakeClient, **settings) -> GeminiChat:
    return GeminiChat(Settings(**settings), client=client, retry_delay_seconds=0)


def test_complete_returns_text_and_sends_one_user_message() -> None:
    client = _FakeClient("hello back")
    chat = _chat(client, chat_model="gemini-test")

    assert chat.complete("hello", 0.7) == "hello back"

    call = client.models.calls[0]
    assert call["model"] == "gemini-test"
    assert call["config"].temperature == 0.7
    assert len(call["contents"]) == 1
    assert call["contents"][0].role == "user"
    assert call["contents"][0].parts[0].text == "hello"


def test_complete_retries_once_then_succeeds() -> None:
    client = _FakeClient(TimeoutError("read timed out"), "second time lucky")
    assert _chat(client).complete("q", 0.7) == "second time lucky"
    assert len(client.models.calls) == 2


def test_complete_raises_after_retry_exhausted() -> None:
    client = _FakeClient(ConnectionError("down"), ConnectionError("still down"))
    with pytest.raises(RemoteServiceError) as excinfo:
        _chat(client).complete("q", 0.7)

    assert len(client.models.calls) == 2
    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_complete_without_retries_calls_once() -> None:
    client = _FakeClient(ConnectionError("down"))
    with pytest.raises(RemoteServiceError):
        _chat(client, max_retries=0).complete("q", 0.7)
    assert len(client.models.calls) == 1


def test_complete_passes_through_empty_content() -> None:
    assert _chat(_FakeClient(None)).complete("q", 0.7) is None


def test_missing_api_key_raises_remote_service_error() -> None:
    chat = GeminiChat(Settings(google_api_key=None))
    with pytest.raises(RemoteServiceError):
        chat.complete("q", 0.7)


def test_client_is_built_with_request_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    built = []

    class _RecordingClient(_FakeClient):
        def __init__(self, **kwargs):
            built.append(kwargs)
            super().__init__("ok")

    monkeypatch.setattr(llm_client.genai, "Client", _RecordingClient)
    chat = GeminiChat(Settings(google_api_key="k", request_timeout_seconds=15), retry_delay_seconds=0)

    assert chat.complete("q", 0.7) == "ok"
    assert len(built) == 1
    assert built[0]["api_key"] == "k"
    assert built[0]["http_options"].timeout == 15000


def _api_error(cls, code: int):
    return cls(code, {"error": {"code": code, "message": "boom", "status": "ERROR"}})


def test_client_errors_are_not_retried() -> None:
    client = _FakeClient(_api_error(errors.ClientError, 400), "never reached")
    with pytest.raises(RemoteServiceError) as excinfo:
        _chat(client).complete("q", 0.7)

    assert len(client.models.calls) == 1
    assert isinstance(excinfo.value.__cause__, errors.ClientError)


def test_server_and_rate_limit_errors_are_retried() -> None:
    for error in (_api_error(errors.ServerError, 503), _api_error(errors.ClientError, 429)):
        client = _FakeClient(error, "recovered")
        assert _chat(client).complete("q", 0.7) == "recovered"
        assert len(client.models.calls) == 2


def test_is_retryable_classification() -> None:
    assert is_retryable(httpx.ReadTimeout("slow"))
    assert is_retryable(httpx.ConnectError("refused"))
    assert is_retryable(TimeoutError())
    assert not is_retryable(_api_error(errors.ClientError, 401))
    assert not is_retryable(ValueError("malformed response"))
