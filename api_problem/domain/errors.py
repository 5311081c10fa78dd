"""
Errors raised by the problem domain.

Raised when application code tries to build a malformed problem.
No framework imports allowed.
"""


class ProblemError(Exception):
    """Base error for all api-problem errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidProblemError(ProblemError, ValueError):
    """Raised when a problem field is missing or of the wrong kind."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid problem field '{field}': {reason}")
        self.field = field
        self.reason = reason
