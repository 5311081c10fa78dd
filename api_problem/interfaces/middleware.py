"""
Error-hook adapter that writes problem responses.

The adapter has the conventional error-middleware shape
``(failure, request, response, proceed)``. It classifies the failure,
and either hands control back through ``proceed`` or writes exactly
three things to the response sink: the content type header, the
status code and the serialized problem body.

The adapter holds only its read-only configuration, so one instance
can serve any number of concurrent requests.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field

from api_problem.application.classify import (
    Ignore,
    Synthesize,
    build_problem,
    classify_failure,
)
from api_problem.domain.problem import PROBLEM_CONTENT_TYPE

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = PROBLEM_CONTENT_TYPE
CONTENT_TYPE_HEADER = "Content-Type"
OPTION_ALIASES = {"stackTrace": "stack_trace", "contentType": "content_type"}


class AdapterConfiguration(BaseModel):
    """Options fixed when the adapter is built.

    Attributes:
        stack_trace: Merge the failure's traceback into synthesized
            problems under ``stack``. May leak internals; off by default.
        content_type: Header value written on every problem response.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    stack_trace: bool = Field(default=False, alias="stackTrace")
    content_type: str = Field(
        default=DEFAULT_CONTENT_TYPE, alias="contentType", min_length=1
    )


class ResponseSink(Protocol):
    """The part of the outgoing response the adapter writes to."""

    def set_header(self, name: str, value: str) -> Any: ...

    def set_status(self, code: int) -> Any: ...

    def send_body(self, text: str) -> Any: ...


class ProblemAdapter:
    """Translates request failures into problem responses.

    Failures that are not exceptions are passed through untouched by
    calling ``proceed``. Problems are written as given. Any other
    exception becomes a 500 "Server Error" problem.
    """

    def __init__(self, configuration: Optional[AdapterConfiguration] = None) -> None:
        self._configuration = configuration or AdapterConfiguration()

    @property
    def configuration(self) -> AdapterConfiguration:
        return self._configuration

    def __call__(
        self,
        failure: Any,
        request: Any,
        response: ResponseSink,
        proceed: Callable[[], Any],
    ) -> None:
        """Handle one failure for one in-flight request.

        Args:
            failure: The value signalled by request handling code.
            request: The originating request. Never inspected.
            response: Sink receiving header, status and body.
            proceed: Continuation called when the failure is ignored.
        """
        resolution = classify_failure(
            failure, stack_trace=self._configuration.stack_trace
        )
        if isinstance(resolution, Ignore):
            logger.debug(
                "Passing through non-error value of type %s", type(failure).__name__
            )
            proceed()
            return

        problem = build_problem(resolution)
        if isinstance(resolution, Synthesize):
            logger.error(
                "Unhandled %s converted to problem response",
                type(failure).__name__,
                exc_info=failure,
            )
        else:
            logger.warning(
                "Problem response: status=%d, title=%s", problem.status, problem.title
            )

        body = problem.to_json()
        response.set_header(CONTENT_TYPE_HEADER, self._configuration.content_type)
        response.set_status(problem.status)
        response.send_body(body)


def _normalize(options: Mapping[str, Any]) -> dict[str, Any]:
    return {OPTION_ALIASES.get(key, key): value for key, value in options.items()}


def problem_middleware(
    configuration: Union[AdapterConfiguration, Mapping[str, Any], None] = None,
    **options: Any,
) -> ProblemAdapter:
    """Build a ProblemAdapter.

    Args:
        configuration: An AdapterConfiguration, or a mapping of options
            using either ``stackTrace``/``contentType`` or snake_case names.
        **options: Keyword options, merged over ``configuration``.

    Returns:
        An adapter bound to the resulting configuration.
    """
    if isinstance(configuration, AdapterConfiguration):
        if not options:
            return ProblemAdapter(configuration)
        merged = configuration.model_dump()
    else:
        merged = _normalize(configuration or {})
    merged.update(_normalize(options))
    return ProblemAdapter(AdapterConfiguration.model_validate(merged))
