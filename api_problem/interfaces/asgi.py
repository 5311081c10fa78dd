"""
FastAPI/Starlette binding for the problem adapter.

Registers exception handlers that run the ProblemAdapter against a
buffered response sink and return the recorded response. Handlers only
ever receive exceptions, so the adapter always answers them.
"""

import logging
from typing import Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response

from api_problem.domain.problem import ApiProblem
from api_problem.interfaces.middleware import AdapterConfiguration, ProblemAdapter

logger = logging.getLogger(__name__)


class BufferedResponseSink:
    """Records what the adapter writes and turns it into a Response."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.status_code: Optional[int] = None
        self.body: Optional[str] = None

    def set_header(self, name: str, value: str) -> "BufferedResponseSink":
        self.headers[name] = value
        return self

    def set_status(self, code: int) -> "BufferedResponseSink":
        self.status_code = code
        return self

    def send_body(self, text: str) -> "BufferedResponseSink":
        self.body = text
        return self

    @property
    def is_sent(self) -> bool:
        return self.body is not None

    def to_response(self) -> Response:
        """Build the Starlette response from the recorded calls.

        Raises:
            RuntimeError: If no body was sent.
        """
        if not self.is_sent:
            raise RuntimeError("No problem body was sent to the sink")
        headers = dict(self.headers)
        media_type = headers.pop("Content-Type", None)
        return Response(
            content=self.body,
            status_code=self.status_code or 500,
            headers=headers,
            media_type=media_type,
        )


def register_problem_handlers(
    app: Starlette, configuration: Optional[AdapterConfiguration] = None
) -> ProblemAdapter:
    """Install problem exception handlers on the application.

    Args:
        app: The FastAPI or Starlette application instance.
        configuration: Adapter options. Defaults apply when omitted.

    Returns:
        The adapter shared by all registered handlers.
    """
    adapter = ProblemAdapter(configuration)

    async def handle_failure(request: Request, exc: Exception) -> Response:
        """Answer a failure with a problem document."""
        sink = BufferedResponseSink()
        # exceptions are always answered, so proceed is never called here
        adapter(exc, request, sink, lambda: None)

        logger.info(
            "Problem response for %s %s: status=%s",
            request.method,
            request.url.path,
            sink.status_code,
        )
        return sink.to_response()

    app.add_exception_handler(ApiProblem, handle_failure)
    app.add_exception_handler(Exception, handle_failure)
    return adapter
