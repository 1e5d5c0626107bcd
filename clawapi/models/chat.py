from typing import Any

from pydantic import BaseModel, ConfigDict


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str | None = "user"
    content: str | list[Any] | None = None

    def text(self) -> str:
        """Plain text of the message; list content keeps only its text parts."""
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        parts = []
        for part in self.content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text") or ""))
        return "\n".join(parts)


class ChatCompletionRequest(BaseModel):
    """OpenAI-style chat completion request.

    ``model`` is optional here so that a missing model is answered with a
    400 listing the available providers instead of a schema error. A null
    or absent ``messages`` list is an empty conversation.
    """

    model_config = ConfigDict(extra="allow")

    model: str | None = None
    messages: list[ChatMessage] | None = None
