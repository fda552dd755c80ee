"""Exceptions surfaced by the msr I/O and condition layer."""

from __future__ import annotations


class MsrError(Exception):
    """Base class for all msr errors."""


class NotFoundError(MsrError, LookupError):
    """A referenced I/O point has no value."""

    def __init__(self, id: str, namespace: str = "input") -> None:
        super().__init__(f"No such {namespace}: {id!r}")
        self.id = id
        self.namespace = namespace


class BackendError(MsrError):
    """Opaque failure from a concrete I/O backend (bus fault, timeout, ...).

    The in-memory :class:`~msr.io.IoState` never raises this.
    """


class ValueKindError(MsrError, TypeError):
    """A value of the wrong kind was handed to a consumer."""
