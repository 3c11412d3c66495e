from __future__ import annotations

import logging
import sys

import structlog

_PRE_CHAIN = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
)


def _renderer(use_json: bool, colors: bool):
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=colors)


def configure_logging(*, log_level: str = "INFO", json_logs: bool | None = None) -> None:
    """Route structlog and stdlib records through one stderr handler.

    stdout carries the progress line, so nothing is logged there. JSON output
    is the default when stderr is not a terminal.
    """
    is_tty = sys.stderr.isatty()
    use_json = not is_tty if json_logs is None else json_logs

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_PRE_CHAIN),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(use_json, colors=is_tty),
            ],
        )
    )

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(log_level.upper())


__all__ = ["configure_logging"]
