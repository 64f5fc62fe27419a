import requests

from block_canvas.config import DIAGRAM_API_URL
from block_canvas.ir.diagram import Diagram
from block_canvas.ir.errors import (
    INVALID_AI_RESPONSE,
    WRONG_BLOCK_COUNT,
    GenerationError,
    InvalidResponseError,
    QuotaError,
    RateLimitError,
    SchemaError,
    ValidationError,
)
from block_canvas.observability import get_logger
from block_canvas.validation import inspect_diagram, validate_diagram

logger = get_logger(__name__)

GENERATE_PATH = "/generate-diagram"


class DiagramClient:
    """
    Client for the generation endpoint.

    One request per generate() call: no retries, no session state. Every
    failure comes back as one of the DiagramError kinds, never as a raw
    requests exception.
    """

    def __init__(
        self,
        base_url: str = DIAGRAM_API_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate(self, description: str) -> Diagram:
        if not isinstance(description, str) or not description.strip():
            raise ValidationError("Description is required")

        try:
            response = self.session.post(
                f"{self.base_url}{GENERATE_PATH}",
                json={"description": description.strip()},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Generation request failed: %s", e)
            raise GenerationError("Failed to reach the diagram service") from e

        if not 200 <= response.status_code < 300:
            raise _error_for_status(response.status_code, _error_text(response))

        try:
            body = response.json()
        except ValueError as e:
            raise InvalidResponseError(INVALID_AI_RESPONSE) from e

        if not isinstance(body, dict) or not body.get("diagram"):
            raise InvalidResponseError(INVALID_AI_RESPONSE)

        try:
            diagram = validate_diagram(body["diagram"])
        except SchemaError as e:
            logger.warning("Generated diagram rejected: %s", e.message)
            raise InvalidResponseError(f"{INVALID_AI_RESPONSE}: {e.message}") from e

        report = inspect_diagram(diagram)
        for issue in report.issues:
            logger.info("[%s] %s", issue.code, issue.message)

        return diagram


# ------------------------------------------------
# Error mapping
# ------------------------------------------------

def _error_text(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or ""
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.text or ""


def _error_for_status(status: int, message: str) -> Exception:
    logger.error("Diagram service returned %s: %s", status, message)
    message = message or f"Diagram service returned {status}"

    if status == 429 or "Rate limit" in message:
        return RateLimitError(message)
    if status == 402 or "Payment" in message or "Usage limit" in message:
        return QuotaError(message)
    if status == 400:
        return ValidationError(message)
    if INVALID_AI_RESPONSE in message or WRONG_BLOCK_COUNT in message:
        return InvalidResponseError(message)
    return GenerationError(message)


USER_MESSAGES = [
    (RateLimitError, "Rate limit exceeded. Please wait a moment and try again."),
    (QuotaError, "Usage limit reached. Please add credits to continue."),
    (InvalidResponseError, "Invalid response from AI. Please try again."),
    (GenerationError, "Failed to generate diagram. Please try again."),
    (ValidationError, "Please describe your product first."),
]


def user_message(error: Exception) -> str:
    """Notification text shown to the user for a failed generation."""
    for kind, text in USER_MESSAGES:
        if isinstance(error, kind):
            return text
    return "An unexpected error occurred. Please try again."
