"""Error values for varswap. Domain functions return these inside Err.

Every error is a frozen dataclass: pattern-matchable, serializable and
safe to store next to the trade it describes. VarSwapError is the base;
the three @final subclasses cover validation failures, unsupported
contract configurations and inconsistent observation data.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import final

from varswap.core.types import UtcDatetime

# Codes carried by ValidationError
MISSING_INPUT = "MISSING_INPUT"
INVALID_INPUT = "INVALID_INPUT"
INVALID_SCHEDULE = "INVALID_SCHEDULE"
INVALID_MAGNITUDE = "INVALID_MAGNITUDE"

UNSUPPORTED_CONFIGURATION = "UNSUPPORTED_CONFIGURATION"
DATA_INCONSISTENCY = "DATA_INCONSISTENCY"


@dataclass(frozen=True, slots=True)
class VarSwapError:
    """Base error value. Not @final: subclassed below."""

    message: str
    code: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced the error

    def with_context(self, context: str) -> VarSwapError:
        """Copy with context prepended to the message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """One offending argument."""

    path: str  # e.g. "obs_start_date"
    constraint: str  # e.g. "must not be None"
    actual_value: str


@final
@dataclass(frozen=True, slots=True)
class ValidationError(VarSwapError):
    """Arguments were absent, malformed or out of range."""

    fields: tuple[FieldViolation, ...]

    @staticmethod
    def of(
        code: str, source: str, violations: tuple[FieldViolation, ...],
        message: str | None = None,
    ) -> ValidationError:
        """Build an error whose default message lists the offending paths."""
        if message is None:
            paths = ", ".join(f"{v.path} {v.constraint}" for v in violations)
            message = f"Invalid arguments: {paths}"
        return ValidationError(
            message=message, code=code, timestamp=UtcDatetime.now(),
            source=source, fields=violations,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            **VarSwapError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


@final
@dataclass(frozen=True, slots=True)
class UnsupportedConfigurationError(VarSwapError):
    """A contract feature is recognised but not implemented."""

    parameter: str
    value: str

    def to_dict(self) -> dict[str, object]:
        return {
            **VarSwapError.to_dict(self),
            "parameter": self.parameter,
            "value": self.value,
        }


@final
@dataclass(frozen=True, slots=True)
class DataInconsistencyError(VarSwapError):
    """Supplied market data contradicts the contract schedule."""

    expected: int
    actual: int

    def to_dict(self) -> dict[str, object]:
        return {
            **VarSwapError.to_dict(self),
            "expected": self.expected,
            "actual": self.actual,
        }
