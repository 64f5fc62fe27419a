import json

from block_canvas.inference.chat_completions_client import ChatCompletionsClient
from block_canvas.inference.prompt import (
    BLOCK_DIAGRAM_TOOL,
    TOOL_NAME,
    build_system_prompt,
    build_user_prompt,
)
from block_canvas.ir.diagram import BLOCK_COUNT, Diagram
from block_canvas.ir.errors import (
    DESCRIPTION_REQUIRED,
    GENERATION_FAILED,
    INVALID_AI_RESPONSE,
    QUOTA_EXHAUSTED,
    RATE_LIMITED,
    WRONG_BLOCK_COUNT,
    GenerationError,
    InvalidResponseError,
    QuotaError,
    RateLimitError,
    SchemaError,
    UpstreamError,
    ValidationError,
)
from block_canvas.observability import get_logger
from block_canvas.validation import inspect_diagram, validate_diagram

logger = get_logger(__name__)


# ----------------------------
# Helpers
# ----------------------------

def map_upstream_error(error: UpstreamError) -> GenerationError:
    """Provider status -> our error kind. 429 and 402 pass through, the rest is generic."""
    if error.status_code == 429:
        return RateLimitError(RATE_LIMITED)
    if error.status_code == 402:
        return QuotaError(QUOTA_EXHAUSTED)
    return GenerationError(GENERATION_FAILED)


def parse_tool_arguments(arguments) -> dict:
    # some providers hand back the arguments already decoded
    if isinstance(arguments, dict):
        return arguments

    if not isinstance(arguments, str):
        raise InvalidResponseError(INVALID_AI_RESPONSE)

    try:
        data = json.loads(arguments)
    except json.JSONDecodeError as e:
        logger.error("Tool arguments are not valid JSON: %s", arguments[:2000])
        raise InvalidResponseError(INVALID_AI_RESPONSE) from e

    if not isinstance(data, dict):
        raise InvalidResponseError(INVALID_AI_RESPONSE)
    return data


# ----------------------------
# Main
# ----------------------------

def generate_block_diagram(description: str, client: ChatCompletionsClient) -> Diagram:
    """
    One forced tool call to the model, then the schema check.

    Raises:
        ValidationError: empty or non-string description
        RateLimitError / QuotaError: provider answered 429 / 402
        GenerationError: any other provider or transport failure
        InvalidResponseError: no tool call, wrong tool, or a diagram that
            fails the schema (including a block count other than 5)
    """
    if not isinstance(description, str) or not description.strip():
        raise ValidationError(DESCRIPTION_REQUIRED)

    logger.info('Generating diagram for: "%s"', description)

    messages = [
        {"role": "system", "content": build_system_prompt()},
        {"role": "user", "content": build_user_prompt(description)},
    ]

    try:
        call = client.call_tool(messages, BLOCK_DIAGRAM_TOOL)
    except UpstreamError as e:
        raise map_upstream_error(e) from e

    logger.info("AI response received")

    if call is None or call.get("name") != TOOL_NAME:
        logger.error("Unexpected tool call: %s", call)
        raise InvalidResponseError(INVALID_AI_RESPONSE)

    data = parse_tool_arguments(call.get("arguments"))

    blocks = data.get("blocks")
    if not isinstance(blocks, list) or len(blocks) != BLOCK_COUNT:
        logger.error("Invalid block count: %s", len(blocks) if isinstance(blocks, list) else None)
        raise InvalidResponseError(WRONG_BLOCK_COUNT)

    try:
        diagram = validate_diagram(data)
    except SchemaError as e:
        logger.error("Generated diagram failed schema check: %s", e.message)
        raise InvalidResponseError(f"{INVALID_AI_RESPONSE}: {e.message}") from e

    report = inspect_diagram(diagram)
    if report.issues:
        logger.warning("Diagram inspection: %s", report.get_summary())
        for issue in report.issues:
            logger.warning("  - [%s] %s", issue.code, issue.message)

    logger.info("Diagram generated successfully with %d blocks", len(diagram.blocks))
    return diagram
