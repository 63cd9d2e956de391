"""Error types raised by the selection engine and its collaborators."""

from typing import Optional


class StackforgeError(Exception):
    """Base class for every user-facing Stackforge error."""


class ParseError(StackforgeError):
    """Rules or blueprint text could not be parsed into the expected shape."""

    def __init__(self, what: str, detail: str):
        self.what = what
        self.detail = detail
        super().__init__(f"Failed to parse {what}: {detail}")


class ValidationError(StackforgeError):
    """A field holds a semantically invalid value."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class PlanValidationError(ValidationError):
    """The produced plan failed its semantic checks."""


class NoCandidateError(StackforgeError):
    """A category has no admissible candidate left after filtering."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"No suitable {category} candidates found")


class BudgetExceededError(StackforgeError):
    """The chosen stack costs more than the blueprint's monthly cap."""

    def __init__(self, cap: float, total: float):
        self.cap = cap
        self.total = total
        super().__init__(
            f"No stack found within cost constraint of ${cap:.2f} "
            f"(selected stack costs ${total:.2f} per month)"
        )


class IoError(StackforgeError):
    """Reading or writing a file failed."""

    def __init__(self, path: str, detail: str, action: Optional[str] = "read"):
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to {action} {path}: {detail}")


class InvariantViolation(RuntimeError):
    """Internal invariant broken; signals a bug upstream, never bad input."""
