"""Domain-level exceptions.

Business rule violations are subclasses of DomainException.  Each one
carries an ``ErrorKind`` so the application layer can turn it into a
Failure result without inspecting the message.

StoreUnavailableError is deliberately *not* a DomainException: it signals
that the relational store itself failed, and it propagates to the caller.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    AMOUNT_MISMATCH = "AMOUNT_MISMATCH"
    EMPTY_INPUT = "EMPTY_INPUT"
    CONFLICT = "CONFLICT"
    INVALID_INPUT = "INVALID_INPUT"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT


class ValidationError(DomainException):
    """An input value broke a business rule (bad quantity, blank address...)."""

    kind = ErrorKind.INVALID_INPUT


class EntityNotFoundError(DomainException):
    """A requested order, payment, product or cart line does not exist."""

    kind = ErrorKind.NOT_FOUND


class InvalidTransitionError(DomainException):
    """The order status machine does not allow the requested move."""

    kind = ErrorKind.INVALID_STATE


class AmountMismatchError(DomainException):
    """A payment amount differs from the order total."""

    kind = ErrorKind.AMOUNT_MISMATCH


class EmptyCartError(DomainException):
    kind = ErrorKind.EMPTY_INPUT


class ConcurrencyConflictError(DomainException):
    """Another writer changed the same row first; the caller may retry."""

    kind = ErrorKind.CONFLICT


class StoreUnavailableError(Exception):
    """The underlying store failed (connection loss, aborted transaction)."""
