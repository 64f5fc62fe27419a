class DiagramError(Exception):
    """Base class for every error raised by the block diagram service."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ============================================================
# CALLER INPUT
# ============================================================

class ValidationError(DiagramError):
    """Bad caller input: empty description, malformed request body."""

    status_code = 400


class SchemaError(ValidationError):
    """A candidate diagram does not have the block/connection shape."""


# ============================================================
# GENERATION (UPSTREAM)
# ============================================================

class GenerationError(DiagramError):
    """Catch-all for transport and upstream failures."""

    status_code = 500


class RateLimitError(GenerationError):
    status_code = 429


class QuotaError(GenerationError):
    status_code = 402


class InvalidResponseError(GenerationError):
    """The model (or the endpoint) answered without a usable diagram."""


class ConfigurationError(GenerationError):
    pass


class UpstreamError(Exception):
    """Non-2xx answer from the chat completions provider."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"upstream returned {status_code}")
        self.status_code = status_code
        self.body = body


# ============================================================
# CANVAS LOOKUPS
# ============================================================

class NodeNotFoundError(DiagramError, KeyError):
    status_code = 404

    def __str__(self) -> str:
        return self.message


class EdgeNotFoundError(DiagramError, KeyError):
    status_code = 404

    def __str__(self) -> str:
        return self.message


# ============================================================
# USER-FACING MESSAGES (endpoint error bodies)
# ============================================================

DESCRIPTION_REQUIRED = "Description is required"
NOT_CONFIGURED = "AI service not configured"
RATE_LIMITED = "Rate limit exceeded. Please try again later."
QUOTA_EXHAUSTED = "Usage limit reached. Please add credits."
GENERATION_FAILED = "Failed to generate diagram"
INVALID_AI_RESPONSE = "Invalid response from AI"
WRONG_BLOCK_COUNT = "AI did not generate exactly 5 blocks"
