"""Claude web protocol adapter.

Replays an authenticated claude.ai browser session:

1. resolve the organization id
2. create an ephemeral conversation
3. probe the models the account may use (best effort)
4. walk the model fallback chain until one candidate streams text
5. decode the completion event stream
6. return the trimmed answer

Conversations created here are never deleted; claude.ai rate-limits
deletions, so they are left behind on purpose.
"""

import json
import logging
import time
import uuid
from contextlib import aclosing
from typing import Any

import httpx

from clawapi.core.adapters.base import ProtocolAdapter
from clawapi.core.adapters.stream import iter_event_payloads
from clawapi.core.errors import (
    UpstreamAuthError,
    UpstreamFatalError,
    UpstreamModelUnavailableError,
)
from clawapi.core.logging import conversation_logger
from clawapi.core.provider.descriptor import ProviderDescriptor
from clawapi.core.provider.runtime import ProviderRuntimeState

logger = logging.getLogger(__name__)

CONVERSATION_NAME = "ClawAPI Session"


def _error_body(raw: bytes) -> dict[str, Any]:
    try:
        data = json.loads(raw or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def is_model_unavailable(body: dict[str, Any]) -> bool:
    """Recognize the "model not permitted for this account" rejection."""
    error = body.get("error")
    if not isinstance(error, dict) or error.get("type") != "permission_error":
        return False
    details = error.get("details")
    return isinstance(details, dict) and details.get("error_code") == "model_not_available"


def text_fragment(event: dict[str, Any]) -> str:
    """Extract the incremental text carried by one completion event."""
    completion = event.get("completion")
    if isinstance(completion, str):
        return completion
    if event.get("type") == "content_block_delta":
        delta = event.get("delta")
        if isinstance(delta, dict) and delta.get("type") == "text_delta":
            return delta.get("text") or ""
    return ""


def is_terminal(event: dict[str, Any]) -> bool:
    if event.get("stop_reason"):
        return True
    return event.get("type") == "message_stop"


class ClaudeWebAdapter(ProtocolAdapter):
    """Drives claude.ai's web API with a replayed cookie session."""

    def __init__(
        self,
        descriptor: ProviderDescriptor,
        *,
        connect_timeout: float = 30.0,
        read_timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(descriptor)
        self.base_url = descriptor.base_url
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(connect_timeout, read=read_timeout),
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    def candidate_models(self, probed: list[str]) -> list[str]:
        """Preferred model, then probed models, then legacy models; each once."""
        params = self.descriptor.protocol
        ordered = [params.preferred_model, *probed, *params.legacy_models]
        seen: set[str] = set()
        candidates = []
        for model in ordered:
            if model and model not in seen:
                seen.add(model)
                candidates.append(model)
        return candidates

    async def _run_cycle(self, state: ProviderRuntimeState, prompt: str) -> str:
        start_time = time.time()
        headers = self.descriptor.build_headers(state.cookie_header, state.user_agent)

        org_id = await self._resolve_organization(headers)
        conversation_id = await self._create_conversation(headers, org_id)
        probed = await self._probe_models(headers, org_id)

        last_unavailable: UpstreamModelUnavailableError | None = None
        for model in self.candidate_models(probed):
            try:
                text = await self._complete(headers, org_id, conversation_id, model, prompt)
            except UpstreamModelUnavailableError as e:
                logger.info(f"{self.descriptor.display_name}: {e.message}, trying next model")
                last_unavailable = e
                continue

            if text:
                duration_ms = (time.time() - start_time) * 1000
                conversation_logger.debug(
                    f"📥 {self.descriptor.name.upper()} RESPONSE | Model: {model} | "
                    f"Duration: {duration_ms:.0f}ms | Chars: {len(text):,}"
                )
                return text.strip()

        if last_unavailable is not None:
            raise last_unavailable

        return f"[No response received from {self.descriptor.display_name}]"

    async def _resolve_organization(self, headers: dict[str, str]) -> str:
        response = await self.client.get(f"{self.base_url}/api/organizations", headers=headers)
        if not response.is_success:
            raise UpstreamAuthError(
                self.descriptor.name,
                f"Auth failed (HTTP {response.status_code}). Please re-authenticate.",
            )

        try:
            organizations = response.json()
            org_id = organizations[0]["uuid"]
        except (ValueError, LookupError, TypeError) as e:
            raise UpstreamAuthError(
                self.descriptor.name,
                "Auth failed (no organization in response). Please re-authenticate.",
            ) from e

        conversation_logger.debug(f"📤 {self.descriptor.name.upper()} ORG | {org_id}")
        return str(org_id)

    async def _create_conversation(self, headers: dict[str, str], org_id: str) -> str:
        conversation_id = str(uuid.uuid4())
        response = await self.client.post(
            f"{self.base_url}/api/organizations/{org_id}/chat_conversations",
            headers=headers,
            json={"uuid": conversation_id, "name": CONVERSATION_NAME},
        )
        if not response.is_success:
            raise UpstreamFatalError(
                self.descriptor.name,
                f"Failed to create conversation (HTTP {response.status_code})",
            )
        conversation_logger.debug(
            f"📤 {self.descriptor.name.upper()} CONVERSATION | {conversation_id}"
        )
        return conversation_id

    async def _probe_models(self, headers: dict[str, str], org_id: str) -> list[str]:
        try:
            response = await self.client.get(
                f"{self.base_url}/api/organizations/{org_id}/models", headers=headers
            )
            if not response.is_success:
                return []
            models = response.json()
            probed = [m["model"] for m in models if isinstance(m, dict) and m.get("model")]
            conversation_logger.debug(f"📤 {self.descriptor.name.upper()} MODELS | {probed}")
            return probed
        except (httpx.HTTPError, ValueError, TypeError) as e:
            logger.debug(f"Model probe failed, using fixed fallback chain: {e!r}")
            return []

    async def _complete(
        self,
        headers: dict[str, str],
        org_id: str,
        conversation_id: str,
        model: str,
        prompt: str,
    ) -> str:
        url = (
            f"{self.base_url}/api/organizations/{org_id}"
            f"/chat_conversations/{conversation_id}/completion"
        )
        body = {
            "prompt": prompt,
            "timezone": "UTC",
            "model": model,
            "attachments": [],
            "files": [],
            "rendering_mode": "markdown",
        }

        async with self.client.stream("POST", url, headers=headers, json=body) as response:
            if not response.is_success:
                error_body = _error_body(await response.aread())
                if is_model_unavailable(error_body):
                    raise UpstreamModelUnavailableError(self.descriptor.name, model)
                raise UpstreamFatalError(
                    self.descriptor.name,
                    f"{self.descriptor.display_name} API rejected response "
                    f"(HTTP {response.status_code})",
                )

            fragments: list[str] = []
            marker = self.descriptor.protocol.stream_marker
            events = iter_event_payloads(response.aiter_bytes(), marker)
            async with aclosing(events):
                async for event in events:
                    fragments.append(text_fragment(event))
                    if is_terminal(event):
                        break

        return "".join(fragments)
