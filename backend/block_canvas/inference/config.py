from block_canvas.config import AI_GATEWAY_URL, AI_MODEL, AI_TIMEOUT, get_api_key
from block_canvas.ir.errors import NOT_CONFIGURED, ConfigurationError
from .chat_completions_client import ChatCompletionsClient


def get_llm_client() -> ChatCompletionsClient:
    api_key = get_api_key()
    if not api_key:
        raise ConfigurationError(NOT_CONFIGURED)

    return ChatCompletionsClient(
        base_url=AI_GATEWAY_URL,
        model=AI_MODEL,
        api_key=api_key,
        timeout=AI_TIMEOUT,
    )
