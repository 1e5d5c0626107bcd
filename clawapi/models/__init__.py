from clawapi.models.chat import ChatCompletionRequest, ChatMessage

__all__ = ["ChatCompletionRequest", "ChatMessage"]
