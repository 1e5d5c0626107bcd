import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from clawapi import __version__
from clawapi.api.endpoints import router as api_router
from clawapi.api.endpoints import system_router
from clawapi.core.config import Config, validate_all
from clawapi.core.container import GatewayState, build_gateway_state
from clawapi.core.logging import configure_root_logging, normalize_log_level

logger = logging.getLogger(__name__)


def create_app(gateway: GatewayState | None = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        gateway: Pre-wired collaborators. When omitted they are built from
            environment configuration at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state = gateway or build_gateway_state(Config())
        app.state.gateway = state
        results = state.start()
        active = [r.name for r in results if r.status == "active"]
        logger.info(f"ClawAPI ready with {len(active)} active provider(s): {', '.join(active)}")
        try:
            yield
        finally:
            await state.shutdown()

    app = FastAPI(title="ClawAPI", version=__version__, lifespan=lifespan)
    app.include_router(api_router, prefix="/v1")
    app.include_router(api_router, include_in_schema=False)
    app.include_router(system_router)
    return app


app = create_app()


def main() -> None:
    if len(sys.argv) > 1 and sys.argv[1] == "--help":
        print(f"ClawAPI v{__version__}")
        print("")
        print("Usage: python -m clawapi.main")
        print("       or: clawapi start")
        print("")
        print("Optional environment variables:")
        print("  HOST - Loopback address to bind (default: 127.0.0.1)")
        print("  PORT - Server port (default: 8855)")
        print("  LOG_LEVEL - Logging level (default: INFO)")
        print("  CLAWAPI_HOME - Session storage root (default: ~/.clawapi)")
        print("  REQUEST_TIMEOUT - Per-request upstream deadline in seconds (default: 300)")
        sys.exit(0)

    errors = validate_all()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}")
        sys.exit(1)

    config = Config()
    run_server(config, config.host, config.port)


def run_server(config: Config, host: str, port: int) -> None:
    """Run the gateway in the foreground on a loopback address."""
    configure_root_logging(config.log_level)
    log_level = normalize_log_level(config.log_level).lower()

    uvicorn.run(
        "clawapi.main:app",
        host=host,
        port=port,
        log_level=log_level,
        access_log=log_level == "debug",
        reload=False,
    )


if __name__ == "__main__":
    main()
