import json

import httpx

from docassist.config import Credentials
from docassist.llm import CompletionClient, CompletionFailure, CompletionSuccess
from docassist.llm.client import CONNECTION_TEST_PROMPT, render_inline
from docassist.settings import SETTINGS_KEY, Settings, SettingsStore, UserProperties


def _client(tmp_path, handler, settings=None):
    store = SettingsStore(UserProperties(str(tmp_path / "properties.json")))
    if settings is not None:
        store.save(settings)
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return CompletionClient(store, Credentials(api_key="sk-test"), http_client=http_client)


def _ok(content):
    return httpx.Response(200, json={"id": "cmpl-1", "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]})


def test_complete_returns_trimmed_first_choice(tmp_path):
    client = _client(tmp_path, lambda request: _ok(" hi "))
    assert client.complete("prompt") == "hi"


def test_request_sends_configured_payload_and_auth(tmp_path):
    seen = []

    def handler(request):
        seen.append(request)
        return _ok("done")

    settings = Settings(base_url="https://llm.example.com/v1/chat/completions", model="m", temperature=0.5, max_tokens=200)
    client = _client(tmp_path, handler, settings)
    result = client.request("Say hi")

    assert result == CompletionSuccess("done")
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://llm.example.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.headers["Content-Type"].startswith("application/json")
    assert json.loads(request.content) == {
        "model": "m",
        "messages": [{"role": "user", "content": "Say hi"}],
        "temperature": 0.5,
        "max_tokens": 200,
    }


def test_server_error_becomes_inline_error_without_retry(tmp_path):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, text="upstream exploded")

    client = _client(tmp_path, handler)
    text = client.complete("prompt")
    assert text.startswith("Error:")
    assert "500" in text
    assert len(calls) == 1


def test_api_failure_carries_status_and_body(tmp_path):
    client = _client(tmp_path, lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))
    result = client.request("prompt")
    assert isinstance(result, CompletionFailure)
    assert result.kind == "api"
    assert result.status_code == 401
    assert "bad key" in result.body
    assert render_inline(result) == "Error: API request failed with status 401"


def test_non_200_success_status_is_an_api_failure(tmp_path):
    client = _client(tmp_path, lambda request: httpx.Response(202, json={"choices": []}))
    result = client.request("prompt")
    assert isinstance(result, CompletionFailure)
    assert result.status_code == 202


def test_malformed_body_is_reported(tmp_path):
    client = _client(tmp_path, lambda request: httpx.Response(200, json={"choices": []}))
    result = client.request("prompt")
    assert isinstance(result, CompletionFailure)
    assert result.kind == "malformed_response"
    assert client.complete("prompt").startswith("Error:")


def test_transport_error_is_reported(tmp_path):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = _client(tmp_path, handler).request("prompt")
    assert isinstance(result, CompletionFailure)
    assert result.kind == "transport"


def test_malformed_stored_settings_do_not_raise(tmp_path):
    client = _client(tmp_path, lambda request: _ok("unused"))
    client.settings_store.properties.set_property(SETTINGS_KEY, "{broken")
    assert client.complete("prompt").startswith("Error:")


def test_connection_check_uses_canned_prompt(tmp_path):
    prompts = []

    def handler(request):
        prompts.append(json.loads(request.content)["messages"][0]["content"])
        return _ok("Connection successful")

    assert _client(tmp_path, handler).test_connection() is True
    assert prompts == [CONNECTION_TEST_PROMPT]


def test_connection_check_fails_on_error_status(tmp_path):
    client = _client(tmp_path, lambda request: httpx.Response(503, text="down"))
    assert client.test_connection() is False
