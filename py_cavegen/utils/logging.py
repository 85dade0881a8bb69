"""structlog configuration shared by scripts and embedding applications."""

import logging
import sys

import structlog


def configure_logging(settings=None) -> None:
    """
    Install the structlog processor chain.

    Args:
        settings: Object with ``log_level`` and ``log_format`` attributes
            (defaults to the package settings)
    """
    if settings is None:
        from ..config import settings as package_settings

        settings = package_settings

    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
