"""Structured logging for the room engine.

Transitions log through module loggers from get_logger. The host calls
configure_logging once (bootstrap does it from Config). Events emitted
while a RoomSession commits carry the room id and the version the change
was computed from, via room_context.
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog

LOG_LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


def redact_word_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace secret player words in log events with their length."""
    if "word" in event_dict:
        word = event_dict.pop("word")
        event_dict["word_length"] = len(word) if word else 0
    return event_dict


def _min_level(log_level: str) -> int:
    try:
        return LOG_LEVELS[log_level.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {log_level!r}, expected one of {', '.join(LOG_LEVELS)}"
        ) from None


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    json_logs: bool = False,
    redact_words: bool = True,
) -> None:
    """Route engine events to stdout or log_file.

    With redact_words on, player words are logged only by length.
    """
    min_level = _min_level(log_level)
    output_stream = open(log_file, "a") if log_file else sys.stdout

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(
            fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
        ),
    ]
    if redact_words:
        processors.append(redact_word_processor)
    processors.append(
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=output_stream.isatty())
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output_stream),
        cache_logger_on_first_use=True,
    )


@contextmanager
def room_context(room_id: str, version: int) -> Iterator[None]:
    """Tag every event logged inside the block with the room and its version."""
    with structlog.contextvars.bound_contextvars(room_id=room_id, version=version):
        yield


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
