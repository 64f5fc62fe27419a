from block_canvas.inference.chat_completions_client import ChatCompletionsClient
from block_canvas.inference.config import get_llm_client

__all__ = ["ChatCompletionsClient", "get_llm_client"]
