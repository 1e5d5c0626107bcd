"""Chat completion handling: checks, prompt flattening and the response envelope."""

from __future__ import annotations

import time
import uuid
from collections.abc import Iterable
from typing import Any

from clawapi.core.container import GatewayState
from clawapi.core.errors import (
    NotActiveError,
    NotInstalledError,
    UnauthenticatedError,
    UnknownProviderError,
)
from clawapi.models.chat import ChatMessage

ROLE_TEMPLATES = {
    "system": "[Instructions]: {content}",
    "user": "{content}",
    "assistant": "[Previous reply]: {content}",
}


def flatten_messages(messages: Iterable[ChatMessage]) -> str:
    """Flatten role-tagged messages into one upstream prompt.

    System parts become ``[Instructions]: ...``, user parts are kept as-is,
    assistant parts become ``[Previous reply]: ...``; parts are separated by
    a blank line and unknown roles are dropped.
    """
    parts = []
    for message in messages:
        template = ROLE_TEMPLATES.get(message.role or "user")
        if template is None:
            continue
        parts.append(template.format(content=message.text()))
    return "\n\n".join(parts)


def provider_from_model(model: str) -> str:
    """Only the trailing segment of a namespaced model id names the provider."""
    return model.split("/")[-1]


def missing_model_message(state: GatewayState) -> str:
    names = state.registry.all_names()
    examples = ", ".join(f"{name}, {state.model_prefix}/{name}" for name in names)
    return f"Missing 'model' field. Use: {examples} | Available: {', '.join(names)}"


def ensure_queryable(state: GatewayState, provider: str) -> None:
    """Run the pre-upstream checks, in order, before any network call.

    Raises:
        UnknownProviderError: Provider not in the registry (404)
        UnauthenticatedError: No session, or it fails qualification (401)
        NotInstalledError: Authenticated but never installed (503)
        NotActiveError: Authenticated but not loaded at startup (503)
    """
    if not state.registry.exists(provider):
        raise UnknownProviderError(
            provider, f"Provider '{provider}' does not exist in the ClawAPI registry."
        )

    if not state.sessions.validate(provider):
        raise UnauthenticatedError(
            provider,
            f"Provider '{provider}' has no valid saved session. "
            f"Re-authenticate it, then restart ClawAPI.",
        )

    if state.runtime.is_active(provider):
        return

    if not state.installs.is_installed(provider):
        raise NotInstalledError(
            provider,
            f"Provider '{provider}' is not installed. "
            f"Install it with: clawapi add {provider}, then restart ClawAPI.",
        )

    raise NotActiveError(
        provider,
        f"Provider '{provider}' is installed but not currently active. "
        f"Restart ClawAPI to load it.",
    )


def build_completion_envelope(model: str, prompt: str, answer: str) -> dict[str, Any]:
    """Wrap an answer in the standard chat completion envelope.

    Usage counters are character counts, not tokens.
    """
    return {
        "id": f"chatcmpl-{uuid.uuid4().hex[:24]}",
        "object": "chat.completion",
        "created": int(time.time()),
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": answer},
                "finish_reason": "stop",
            }
        ],
        "usage": {
            "prompt_tokens": len(prompt),
            "completion_tokens": len(answer),
            "total_tokens": len(prompt) + len(answer),
        },
    }
