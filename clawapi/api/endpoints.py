import logging
import time
import traceback
import uuid
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from clawapi import __version__
from clawapi.api.services.chat_completions import (
    build_completion_envelope,
    ensure_queryable,
    flatten_messages,
    missing_model_message,
    provider_from_model,
)
from clawapi.api.services.error_handling import ErrorResponseBuilder
from clawapi.api.services.models_listing import list_models
from clawapi.core.container import GatewayState
from clawapi.core.error_types import ErrorType
from clawapi.core.errors import ClawAPIError
from clawapi.core.logging import ConversationLogger, conversation_logger
from clawapi.models.chat import ChatCompletionRequest

logger = logging.getLogger(__name__)

router = APIRouter()
system_router = APIRouter()


def get_gateway(request: Request) -> GatewayState:
    """Resolve the gateway state installed on the app by the composition root."""
    return request.app.state.gateway


@router.get("/models")
async def models(gateway: GatewayState = Depends(get_gateway)) -> Dict[str, Any]:
    return list_models(gateway)


@router.post("/chat/completions", response_model=None)
async def chat_completions(
    request: ChatCompletionRequest, gateway: GatewayState = Depends(get_gateway)
) -> JSONResponse:
    if not request.model:
        logger.warning("Rejected chat request without a model")
        return ErrorResponseBuilder.bad_request(missing_model_message(gateway))

    provider = provider_from_model(request.model)
    request_id = str(uuid.uuid4())

    with ConversationLogger.correlation_context(request_id):
        try:
            ensure_queryable(gateway, provider)
        except ClawAPIError as e:
            logger.warning(f"⛔ REJECTED | Provider: {provider} | {e.error_type.value}: {e}")
            return ErrorResponseBuilder.from_exception(e)

        messages = request.messages or []
        prompt = flatten_messages(messages)

        if gateway.log_request_metrics:
            conversation_logger.info(
                f"🚀 START | Model: {request.model} | Provider: {provider} | "
                f"Messages: {len(messages)} | Prompt: {len(prompt):,} chars"
            )
        else:
            logger.debug(f"Processing chat request: model={request.model}")

        start_time = time.time()
        try:
            answer = await gateway.relay.ask(provider, prompt)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            error_type = (
                e.error_type if isinstance(e, ClawAPIError) else ErrorType.UNEXPECTED_ERROR
            )
            conversation_logger.error(
                f"❌ ERROR | Duration: {duration_ms:.0f}ms | "
                f"Type: {error_type.value} | Error: {e}"
            )
            if not isinstance(e, ClawAPIError):
                conversation_logger.error(traceback.format_exc())
            # Every adapter failure surfaces as 500 with the raw message
            return ErrorResponseBuilder.internal_error(str(e))

        if gateway.log_request_metrics:
            duration_ms = (time.time() - start_time) * 1000
            conversation_logger.info(
                f"✅ SUCCESS | Duration: {duration_ms:.0f}ms | "
                f"Chars: {len(prompt):,}→{len(answer):,}"
            )

        return JSONResponse(
            status_code=200,
            content=build_completion_envelope(request.model, prompt, answer),
        )


@system_router.get("/health")
async def health_check(gateway: GatewayState = Depends(get_gateway)) -> Dict[str, Any]:
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "providers": {
            "active": gateway.runtime.active_names(),
            "installed": gateway.installs.installed_names(gateway.registry.all_names()),
        },
    }


@system_router.get("/")
async def root() -> Dict[str, Any]:
    """Root endpoint"""
    return {
        "message": f"ClawAPI v{__version__}",
        "status": "running",
        "endpoints": {
            "models": "/v1/models",
            "chat_completions": "/v1/chat/completions",
            "health": "/health",
        },
    }
