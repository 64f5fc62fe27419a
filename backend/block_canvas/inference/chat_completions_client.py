import json

import requests

from block_canvas.ir.errors import GenerationError, UpstreamError
from block_canvas.observability import get_logger

logger = get_logger(__name__)


class ChatCompletionsClient:
    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str | None = None,
        temperature: float | None = None,
        timeout: float = 300,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.timeout = timeout

    def complete(self, messages, **extra) -> dict:
        """POST one chat completion. Raises UpstreamError on a non-2xx answer."""
        url = f"{self.base_url}/chat/completions"

        payload = {"model": self.model, "messages": messages, **extra}
        if self.temperature is not None:
            payload["temperature"] = self.temperature

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("AI gateway unreachable: %s", e)
            raise GenerationError("AI gateway unreachable") from e

        if not response.ok:
            logger.error("AI gateway error: %s %s", response.status_code, response.text)
            raise UpstreamError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise GenerationError("AI gateway returned a non-JSON body") from e

    def call_tool(self, messages, tool: dict) -> dict | None:
        """
        Force a single function call and return {"name", "arguments"}.

        Returns None when the model answered without a tool call. The
        arguments string is returned unparsed.
        """
        data = self.complete(
            messages,
            tools=[tool],
            tool_choice={"type": "function", "function": {"name": tool["function"]["name"]}},
        )

        try:
            call = data["choices"][0]["message"]["tool_calls"][0]["function"]
        except (KeyError, IndexError, TypeError):
            logger.error("Unexpected response format: %s", json.dumps(data)[:2000])
            return None

        return {"name": call.get("name"), "arguments": call.get("arguments")}
