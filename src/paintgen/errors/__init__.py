"""Error handling: exception hierarchy and failure classification."""

from paintgen.errors.exceptions import (
    CancellationError,
    ConfigError,
    DecodeError,
    DispatchError,
    PaintgenError,
    ParseError,
    TerminalError,
    TransientError,
)

__all__ = [
    "PaintgenError",
    "ConfigError",
    "DecodeError",
    "TransientError",
    "TerminalError",
    "DispatchError",
    "CancellationError",
    "ParseError",
]
