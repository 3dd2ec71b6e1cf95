"""structlog configuration over the standard logging module"""

import logging

import structlog


def configure_logging(level: str = "WARNING", fmt: str = "console") -> None:
    """Route structlog events through stdlib logging, rendered as console text or JSON."""
    renderer = structlog.processors.JSONRenderer() if fmt == "json" else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    root_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(format="%(message)s", force=True)
    logging.getLogger().setLevel(root_level)
