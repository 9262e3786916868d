"""Result types for request validation.

Validation never raises for bad input. Instead it returns a ValidationResult
holding either the accepted value or the violations that were found.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Violation:
    """A single failed constraint, attributed to one request field."""

    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of validating one request.

    Exactly one of `value` and `violations` is populated: an accepted value
    with no violations, or no value with at least one violation.
    """

    value: T | None = None
    violations: tuple[Violation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @classmethod
    def ok(cls, value: T) -> "ValidationResult[T]":
        """Create a successful result carrying the accepted value."""
        return cls(value=value)

    @classmethod
    def failure(cls, violations: list[Violation]) -> "ValidationResult[T]":
        """Create a failed result from a non-empty list of violations."""
        if not violations:
            raise ValueError("A failed validation result needs at least one violation")
        return cls(value=None, violations=tuple(violations))

    def errors_by_field(self) -> dict[str, str]:
        """Violations as an insertion-ordered field -> message mapping.

        A field with several violations keeps its first message.
        """
        errors: dict[str, str] = {}
        for violation in self.violations:
            errors.setdefault(violation.field, violation.message)
        return errors
