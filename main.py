"""
Main entrypoint: load settings, build the FastAPI app, run uvicorn.

Env: SOLANA_RPC_URL, TOKEN_MINT_ADDRESS, TOKEN_PROGRAM_ID, TRANSFER_SOURCE_ADDRESS,
WALLET_CONNECTION_MODE, LOGGING_ENABLED, API_HOST, API_PORT, LOG_LEVEL, etc.

API only: uvicorn backend_printwatch.api_server.app:app --host 0.0.0.0 --port 3000
"""

import sys

# Configure structured JSON logging before other imports that may log
from backend_printwatch.printwatch_logging import configure_structlog, get_logger

logger = get_logger("main")


def main() -> None:
    """Read configuration once and serve the API in the main thread."""
    from backend_printwatch.api_server.server import create_app
    from backend_printwatch.config import get_settings
    from backend_printwatch.config.env import mask_rpc_url
    from backend_printwatch.core.exceptions import ConfigurationError

    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error("main_config_error", message=str(e))
        sys.exit(1)

    # .env is loaded by now; apply its LOG_FORMAT / LOG_LEVEL
    configure_structlog(settings.log_format, settings.log_level)
    app = create_app(settings)
    import uvicorn

    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        rpc_url=mask_rpc_url(settings.rpc_url),
    )
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
