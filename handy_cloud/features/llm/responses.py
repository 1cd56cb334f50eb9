"""Wire models for provider requests and responses, plus parsing helpers."""

from typing import Literal, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from handy_cloud.features.llm.errors import ResponseShapeError


ModelT = TypeVar("ModelT", bound=BaseModel)


class ChatMessage(BaseModel):
    """Single chat message sent to a provider."""

    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    """Body of a ``/chat/completions`` request."""

    model: str
    messages: list[ChatMessage]


class ChatMessageResponse(BaseModel):
    """Message inside a completion choice. ``content`` may be absent."""

    content: str | None = None


class ChatChoice(BaseModel):
    """One completion choice."""

    message: ChatMessageResponse


class ChatCompletionResponse(BaseModel):
    """Body of a successful ``/chat/completions`` response."""

    choices: list[ChatChoice]

    def first_content(self) -> str | None:
        """Return the first choice's content, or None if there is none."""
        if not self.choices:
            return None
        return self.choices[0].message.content


class TranscriptionResponse(BaseModel):
    """Body of a successful ``/audio/transcriptions`` response."""

    text: str


class ApiErrorDetail(BaseModel):
    """Inner ``error`` object of an OpenAI-style error body."""

    message: str


class ApiErrorBody(BaseModel):
    """OpenAI-style error body: ``{"error": {"message": ...}}``."""

    error: ApiErrorDetail


def describe_status(response: httpx.Response) -> str:
    """Format a status line such as ``401 Unauthorized``."""
    reason = response.reason_phrase
    if reason:
        return f"{response.status_code} {reason}"
    return str(response.status_code)


async def read_error_text(response: httpx.Response, placeholder: str) -> str:
    """Read a failed response body as text, best effort.

    Args:
        response: Non-success response.
        placeholder: Text substituted when the body cannot be read.

    Returns:
        Body text or the placeholder.
    """
    try:
        await response.aread()
        return response.text
    except (httpx.HTTPError, httpx.StreamError, UnicodeDecodeError, LookupError):
        return placeholder


def parse_body(response: httpx.Response, model: type[ModelT], context: str) -> ModelT:
    """Validate a response body against a wire model.

    Args:
        response: Response whose body has been read.
        model: Pydantic model describing the expected shape.
        context: Message prefix for the raised error.

    Returns:
        Parsed model instance.

    Raises:
        ResponseShapeError: If the body is not JSON or has the wrong shape.
    """
    try:
        return model.model_validate_json(response.content)
    except ValidationError as exc:
        msg = f"{context}: {exc}"
        raise ResponseShapeError(msg) from exc


def parse_error_message(body: str) -> str | None:
    """Extract ``error.message`` from an OpenAI-style error body, if present."""
    try:
        return ApiErrorBody.model_validate_json(body).error.message
    except ValidationError:
        return None
