from __future__ import annotations

import logging

import structlog


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    numeric_level = logging.getLevelName(level.strip().upper())
    return numeric_level if isinstance(numeric_level, int) else logging.INFO


def configure_logging(level: str | int = "INFO", json_logs: bool = True) -> None:
    """JSON lines for deployments, coloured console output for local runs."""
    numeric_level = resolve_level(level)

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
    )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        # ConsoleRenderer formats exceptions itself
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


sql_logger = get_logger("sql")
