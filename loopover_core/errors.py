from __future__ import annotations


class LoopoverError(Exception):
    """Base class for all errors raised by the loopover engine and its plumbing."""


class InvalidToken(LoopoverError, ValueError):
    """A move log contains a character that is not a move token."""

    def __init__(self, token: str) -> None:
        super().__init__(f"invalid move token: {token!r}")
        self.token = token


class ConfigError(LoopoverError, ValueError):
    """Board size or configuration value outside the supported range."""
