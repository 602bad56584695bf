"""Result reporting convention.

Every application handler returns a ``returns`` Result: ``Success(value)``
or ``Failure(CoreError)``.  Expected business failures never escape a
handler as exceptions; only StoreUnavailableError does.

Callers that want the flat ``{status, message}`` report use ``report()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from returns.pipeline import is_successful
from returns.result import Failure, Result

from quitq.domain.exceptions import DomainException, ErrorKind

logger = logging.getLogger(__name__)

SUCCESS = "Success"
FAILURE = "Failure"


@dataclass(frozen=True)
class CoreError:
    """Why an operation failed.  Branch on ``kind``; ``message`` is for humans."""

    kind: ErrorKind
    message: str

    @staticmethod
    def from_exception(exc: DomainException) -> CoreError:
        return CoreError(kind=exc.kind, message=str(exc))


@dataclass(frozen=True)
class Outcome:
    status: str  # SUCCESS or FAILURE
    message: str

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS


def fail(operation: str, exc: DomainException) -> Failure[CoreError]:
    """Log a rejected operation and wrap the reason in a Failure."""
    error = CoreError.from_exception(exc)
    logger.info(
        "%s rejected: %s",
        operation,
        error.message,
        extra={"operation": operation, "status": FAILURE, "error": error.kind.value},
    )
    return Failure(error)


def report(result: Result[Any, CoreError], success_message: str) -> Outcome:
    """Flatten a Result into the uniform ``{status, message}`` outcome."""
    if is_successful(result):
        return Outcome(status=SUCCESS, message=success_message)
    return Outcome(status=FAILURE, message=result.failure().message)
