"""
Logging for toonconv.

Library code logs through the shared loguru logger and never installs a
sink on its own. The CLI calls configure_logging() to send records to
STDERR, keeping STDOUT for TOON output.

Every encode call runs inside encode_scope(), which stores its encode id
in a context variable; configure_logging() stamps that id on each record
so the lines of one encode can be grepped together.
"""

import os
import secrets
import string
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator

from loguru import logger as loguru_logger

_BASE36 = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class EncodeScope:
    """The encode call a log record belongs to."""

    encode_id: str
    operation: str | None = None


_current_scope: ContextVar[EncodeScope | None] = ContextVar("encode_scope", default=None)


def base36_encode(number: int) -> str:
    """Render a non-negative integer in base 36 (digits, then a-z)."""
    digits = []
    while True:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
        if not number:
            return "".join(reversed(digits))


def new_encode_id() -> str:
    """Return ``enc_<epoch ms in base36>_<8 hex chars>``."""
    millis = time.time_ns() // 1_000_000
    return f"enc_{base36_encode(millis)}_{secrets.token_hex(4)}"


def current_scope() -> EncodeScope | None:
    return _current_scope.get()


def current_encode_id() -> str | None:
    scope = _current_scope.get()
    return scope.encode_id if scope else None


@contextmanager
def encode_scope(encode_id: str, operation: str | None = None) -> Iterator[EncodeScope]:
    """Tag every record logged inside the block with ``encode_id``."""
    scope = EncodeScope(encode_id, operation)
    token = _current_scope.set(scope)
    try:
        yield scope
    finally:
        _current_scope.reset(token)


def _stamp_encode_id(record: dict[str, Any]) -> None:
    record["extra"]["encode_id"] = current_encode_id() or "-"


LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[encode_id]}</cyan> | {message}"
)


def configure_logging(verbose: bool = False) -> None:
    """Route log records to STDERR.

    Args:
        verbose: Log at DEBUG instead of WARNING. DEBUG=true in the
            environment has the same effect.
    """
    debug = verbose or os.environ.get("DEBUG", "").lower() == "true"
    loguru_logger.remove()
    loguru_logger.configure(patcher=_stamp_encode_id)
    loguru_logger.add(sys.stderr, level="DEBUG" if debug else "WARNING", format=LOG_FORMAT)


logger = loguru_logger
