"""Diagnostic sinks.

A sink is any callable ``sink(message, *context)``. It is never awaited and
must not raise.
"""
import logging
from typing import Any, Callable, Union

Sink = Callable[..., None]


def null_sink(message: str, *context: Any) -> None:
    """Discard every diagnostic."""


def logging_sink(
    logger: Union[str, logging.Logger] = "keychain.transform",
    level: int = logging.WARNING
) -> Sink:
    """Adapt a :mod:`logging` logger to the sink contract.

    Context values are appended to the message; the first exception found
    among them is attached as ``exc_info``.

    Args:
        logger: Logger instance or logger name.
        level: Level used for every diagnostic.

    Returns:
        A sink callable.
    """
    if isinstance(logger, str):
        logger = logging.getLogger(logger)

    def sink(message: str, *context: Any) -> None:
        exc = next(
            (item for item in context if isinstance(item, BaseException)),
            None
        )
        extra = [item for item in context if item is not exc]
        fmt = " ".join(["%s"] * (len(extra) + 1))
        logger.log(level, fmt, message, *extra, exc_info=exc)

    return sink
