"""FastAPI application entry point."""

import logging

import structlog
import uvicorn

from relationship_wise.api.app import create_app
from relationship_wise.config import get_settings


def configure_logging(production: bool) -> None:
    """Configure structlog: JSON in production, console output otherwise."""
    if production:
        # Production: JSON format for machine parsing
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
        level = logging.INFO
    else:
        # Development: console format for human readability
        renderers = [structlog.dev.ConsoleRenderer()]
        level = logging.DEBUG

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *renderers,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


settings = get_settings()
configure_logging(settings.is_production)

app = create_app(settings)


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "relationship_wise.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
