"""structlog + stdlib logging setup shared by the API and the CLI.

Both ``structlog.get_logger()`` and plain ``logging.getLogger(__name__)``
calls (uvicorn, SQLAlchemy) end up on one handler (stdout unless told otherwise),
rendered either as JSON lines or as a coloured console for local work.
"""

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(
    json_output: bool = True,
    log_level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib records through one formatter.

    Args:
        json_output: Render JSON lines when ``True``, otherwise use
            structlog's development console renderer.
        log_level: Root level name such as ``"DEBUG"`` or ``"WARNING"``.
        stream: Destination of the log lines, stdout when omitted.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # matplotlib's font manager is chatty at DEBUG
    logging.getLogger("matplotlib").setLevel(max(root.level, logging.WARNING))
