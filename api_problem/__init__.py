"""
api-problem — RFC 7807 problem responses for failing HTTP requests.

Package root. Layered the same way as a hexagonal service:

Layers:
    - domain: The problem value and its validation errors.
    - application: Failure classification (ignore / use given / synthesize).
    - interfaces: The error-hook adapter and the FastAPI/Starlette binding.
    - shared: Cross-cutting concerns (logging).
"""

from api_problem.domain.errors import InvalidProblemError, ProblemError
from api_problem.domain.problem import ApiProblem
from api_problem.interfaces.middleware import (
    AdapterConfiguration,
    ProblemAdapter,
    ResponseSink,
    problem_middleware,
)

__all__ = [
    "AdapterConfiguration",
    "ApiProblem",
    "InvalidProblemError",
    "ProblemAdapter",
    "ProblemError",
    "ResponseSink",
    "problem_middleware",
]
