import logging
import sys
from enum import Enum

import structlog
from pydantic_settings import BaseSettings
from structlog.typing import Processor


class LogFormats(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class LogSettings(BaseSettings):
    log_format: LogFormats = LogFormats.CONSOLE
    log_level: str = "INFO"


def setup_logger(settings: LogSettings | None = None):
    """Route structlog and stdlib logging through one stdout handler.

    The runner timestamps every console line itself, so only JSON output
    carries its own timestamp.
    """
    settings = settings or LogSettings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    log_renderer: Processor
    if settings.log_format == LogFormats.JSON:
        processors += [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
        ]
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    # stdout keeps log lines ordered with the ::group:: workflow commands
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level.upper())

    for _log in ["botocore", "boto3", "urllib3"]:
        logging.getLogger(_log).setLevel(logging.WARNING)
