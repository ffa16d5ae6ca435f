"""Client for OpenAI-compatible chat-completion endpoints.

The configured base URL is the full chat-completions endpoint and is posted
to as is. Failures never escape as exceptions: `CompletionClient.request`
returns a `CompletionFailure` and `CompletionClient.complete` renders it as
an inline "Error: ..." string.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

import httpx
from openai import APIConnectionError, APIStatusError, OpenAI

from docassist.config import Credentials
from docassist.settings import Settings, SettingsStore

logger = logging.getLogger(__name__)

CONNECTION_TEST_PROMPT = "Hello, please respond with 'Connection successful'"


class ApiError(Exception):
    """Non-200 response from the completion endpoint."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API request failed with status {status_code}")
        self.status_code = status_code
        self.body = body


class MalformedResponseError(Exception):
    """200 response whose body has no first choice message content."""

    def __init__(self, message: str, body: str) -> None:
        super().__init__(message)
        self.body = body


@dataclass(frozen=True)
class CompletionSuccess:
    text: str


@dataclass(frozen=True)
class CompletionFailure:
    kind: str  # api | malformed_response | transport | error
    detail: str
    status_code: Optional[int] = None
    body: Optional[str] = None


CompletionResult = Union[CompletionSuccess, CompletionFailure]


def render_inline(result: CompletionResult) -> str:
    """Text to put in the document for a completion result."""
    if isinstance(result, CompletionSuccess):
        return result.text
    return f"Error: {result.detail}"


def build_payload(settings: Settings, prompt: str) -> Dict:
    """Build the chat-completion request body.

    Doxygen:
    - @param settings: Current user settings (model, temperature, max tokens).
    - @param prompt: Text sent as the single user message.
    - @return: JSON-serializable request body.
    """
    messages: List[Dict[str, str]] = [{"role": "user", "content": prompt}]
    return {
        "model": settings.model,
        "messages": messages,
        "temperature": settings.temperature,
        "max_tokens": settings.max_tokens,
    }


def extract_content(body: str) -> str:
    """Return the trimmed content of the first choice in a response body.

    Doxygen:
    - @param body: Raw response body text.
    - @return: `choices[0].message.content` stripped of surrounding whitespace.
    - @throws MalformedResponseError: If the body is not JSON or lacks the content field.
    """
    try:
        data = json.loads(body)
        content = data["choices"][0]["message"]["content"]
    except (json.JSONDecodeError, KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError(f"Unexpected response format: {exc!r}", body) from exc
    if not isinstance(content, str):
        raise MalformedResponseError("Unexpected response format: message content is not a string", body)
    return content.strip()


def get_client(
    settings: Settings,
    credentials: Credentials,
    http_client: httpx.Client | None = None,
    timeout: float | None = None,
) -> OpenAI:
    """Create an OpenAI client for the configured endpoint.

    Retries are disabled: a failed call is reported immediately.

    Doxygen:
    - @param settings: Settings whose base URL the client targets.
    - @param credentials: API key holder; a missing key is sent as empty.
    - @param http_client: Optional preconfigured `httpx.Client` (custom transport).
    - @param timeout: Request timeout in seconds; None keeps the SDK default.
    - @return: Configured `OpenAI` client instance.
    """
    kwargs = {}
    if timeout is not None:
        kwargs["timeout"] = timeout
    if http_client is not None:
        kwargs["http_client"] = http_client
    return OpenAI(
        base_url=settings.base_url,
        api_key=credentials.api_key or "",
        max_retries=0,
        **kwargs,
    )


class CompletionClient:
    def __init__(
        self,
        settings_store: SettingsStore,
        credentials: Credentials,
        http_client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self.settings_store = settings_store
        self.credentials = credentials
        self.http_client = http_client
        self.timeout = timeout

    def _post(self, settings: Settings, prompt: str) -> str:
        client = get_client(settings, self.credentials, self.http_client, self.timeout)
        try:
            response = client.post(
                settings.base_url,
                cast_to=httpx.Response,
                body=build_payload(settings, prompt),
            )
        except APIStatusError as exc:
            raise ApiError(exc.status_code, exc.response.text) from exc
        if response.status_code != 200:
            raise ApiError(response.status_code, response.text)
        return extract_content(response.text)

    def request(self, prompt: str) -> CompletionResult:
        """Send the prompt and return the outcome; never raises.

        Doxygen:
        - @param prompt: Text sent as the single user message.
        - @return: `CompletionSuccess` with the trimmed reply, or `CompletionFailure`
          of kind api | malformed_response | transport | error.
        """
        try:
            settings = self.settings_store.load()
            logger.debug("POST %s model=%s", settings.base_url, settings.model)
            return CompletionSuccess(text=self._post(settings, prompt))
        except ApiError as exc:
            logger.error("Completion request failed (%s): %s", exc.status_code, exc.body)
            return CompletionFailure(kind="api", detail=str(exc), status_code=exc.status_code, body=exc.body)
        except MalformedResponseError as exc:
            logger.error("Completion response could not be parsed: %s", exc.body)
            return CompletionFailure(kind="malformed_response", detail=str(exc), status_code=200, body=exc.body)
        except APIConnectionError as exc:
            logger.error("Completion endpoint unreachable: %s", exc)
            return CompletionFailure(kind="transport", detail=str(exc))
        except Exception as exc:
            logger.exception("Error calling completion API")
            return CompletionFailure(kind="error", detail=str(exc))

    def complete(self, prompt: str) -> str:
        return render_inline(self.request(prompt))

    def test_connection(self) -> bool:
        """Round-trip a canned prompt. Diagnostics only.

        Doxygen:
        - @return: True if the endpoint returned a completion.
        """
        result = self.request(CONNECTION_TEST_PROMPT)
        if isinstance(result, CompletionSuccess):
            logger.info("API test response: %s", result.text)
            return True
        logger.warning("API test failed: %s", result.detail)
        return False
