"""
ASGI application entrypoint.

Run with: uvicorn backend_printwatch.api_server.app:app --host 0.0.0.0 --port 3000
Settings are read from the environment (and .env) when this module is imported.
"""

from backend_printwatch.api_server.server import create_app
from backend_printwatch.config import get_settings
from backend_printwatch.printwatch_logging import configure_structlog

settings = get_settings()
configure_structlog(settings.log_format, settings.log_level)

app = create_app(settings)

__all__ = ["app"]
