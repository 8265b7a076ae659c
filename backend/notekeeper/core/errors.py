from __future__ import annotations


class NotekeeperError(Exception):
    """Base class for domain errors raised by services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(NotekeeperError):
    """Caller supplied input the operation cannot act on."""


class NotFoundError(NotekeeperError):
    """Referenced note, tag, notebook or folder does not exist."""
