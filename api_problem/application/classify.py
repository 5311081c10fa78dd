"""
Use case: Classify a failure surfaced by request handling.

Input: any value handed to the error hook.
Output: Resolution (Ignore | UseGiven | Synthesize), then an ApiProblem.
Side effects: None.
Failure cases: None. Every error-shaped value resolves to a valid problem.
"""

import traceback
from dataclasses import dataclass
from typing import Any, Optional, Union

from api_problem.domain.problem import ApiProblem

SERVER_ERROR_STATUS = 500
SERVER_ERROR_TITLE = "Server Error"
STACK_KEY = "stack"


@dataclass(frozen=True)
class Ignore:
    """The failure is not error-shaped; hand it back to the framework."""


@dataclass(frozen=True)
class UseGiven:
    """The failure already is a problem and is used unchanged."""

    problem: ApiProblem


@dataclass(frozen=True)
class Synthesize:
    """A generic failure to be turned into a server-error problem.

    Attributes:
        message: Human-readable text of the failure.
        trace: Formatted traceback, present only when traces are enabled.
    """

    message: str
    trace: Optional[str] = None


Resolution = Union[Ignore, UseGiven, Synthesize]


def _format_trace(failure: BaseException) -> str:
    return "".join(
        traceback.format_exception(type(failure), failure, failure.__traceback__)
    )


def classify_failure(failure: Any, *, stack_trace: bool = False) -> Resolution:
    """Decide how a failure should be answered.

    Args:
        failure: Whatever the framework passed to the error hook.
        stack_trace: Capture the failure's traceback text when True.

    Returns:
        Ignore for values that are not exceptions, UseGiven for problems,
        Synthesize for every other exception.
    """
    if isinstance(failure, ApiProblem):
        return UseGiven(failure)
    if not isinstance(failure, BaseException):
        return Ignore()

    message = str(failure) or type(failure).__name__
    trace = _format_trace(failure) if stack_trace else None
    return Synthesize(message=message, trace=trace)


def build_problem(resolution: Union[UseGiven, Synthesize]) -> ApiProblem:
    """Turn a resolution into the problem to be written to the response.

    Raises:
        TypeError: If called with Ignore, which has no problem to write.
    """
    if isinstance(resolution, UseGiven):
        return resolution.problem
    if isinstance(resolution, Synthesize):
        additional = {STACK_KEY: resolution.trace} if resolution.trace else None
        return ApiProblem(
            status=SERVER_ERROR_STATUS,
            title=SERVER_ERROR_TITLE,
            detail=resolution.message,
            additional=additional,
        )
    raise TypeError(f"No problem can be built from {resolution!r}")
