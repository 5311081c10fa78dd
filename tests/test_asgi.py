"""
Tests for the FastAPI binding.

Runs real requests through a FastAPI app with the problem handlers
registered, and checks the responses clients receive.
"""

from typing import Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api_problem.domain.problem import ApiProblem
from api_problem.interfaces.asgi import BufferedResponseSink, register_problem_handlers
from api_problem.interfaces.middleware import AdapterConfiguration


def _build_app(configuration: Optional[AdapterConfiguration] = None) -> FastAPI:
    app = FastAPI()
    register_problem_handlers(app, configuration)

    @app.get("/polls/{poll_id}")
    def get_poll(poll_id: int) -> dict:
        if poll_id == 0:
            raise ApiProblem(
                status=404,
                title="Not Found",
                detail=f"Poll {poll_id} does not exist",
                type="https://example.com/problems/poll-not-found",
                additional={"poll_id": poll_id},
            )
        if poll_id == 1:
            raise RuntimeError("Database connection failed")
        return {"id": poll_id}

    return app


@pytest.fixture
def client() -> TestClient:
    return TestClient(_build_app(), raise_server_exceptions=False)


class TestProblemHandlers:
    """Tests for problem handlers on a FastAPI application."""

    def test_successful_request_untouched(self, client) -> None:
        """Requests that do not fail are answered normally."""
        response = client.get("/polls/7")

        assert response.status_code == 200
        assert response.json() == {"id": 7}

    def test_raised_problem_returned(self, client) -> None:
        """A raised problem is the response body, with its status."""
        response = client.get("/polls/0")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"
        assert response.json() == {
            "status": 404,
            "title": "Not Found",
            "detail": "Poll 0 does not exist",
            "type": "https://example.com/problems/poll-not-found",
            "poll_id": 0,
        }

    def test_unexpected_error_becomes_server_error(self, client) -> None:
        """An unexpected exception is answered with a 500 problem."""
        response = client.get("/polls/1")

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/problem+json"
        assert response.json() == {
            "status": 500,
            "title": "Server Error",
            "detail": "Database connection failed",
        }

    def test_configuration_applied(self) -> None:
        """Content type and stack trace options reach the response."""
        configuration = AdapterConfiguration(
            stack_trace=True, content_type="application/json"
        )
        client = TestClient(_build_app(configuration), raise_server_exceptions=False)

        response = client.get("/polls/1")

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert "RuntimeError: Database connection failed" in response.json()["stack"]

    def test_http_exceptions_keep_framework_handling(self, client) -> None:
        """Routing errors are left to the framework's own handlers."""
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}


class TestBufferedResponseSink:
    """Tests for the buffered response sink."""

    def test_records_calls_into_response(self) -> None:
        """Header, status and body end up on the built response."""
        sink = BufferedResponseSink()
        sink.set_header("Content-Type", "application/problem+json").set_status(
            418
        ).send_body('{"status":418}')

        response = sink.to_response()

        assert response.status_code == 418
        assert response.body == b'{"status":418}'
        assert response.headers["content-type"] == "application/problem+json"

    def test_response_can_be_built_twice(self) -> None:
        """Building a response leaves the recorded headers intact."""
        sink = BufferedResponseSink()
        sink.set_header("Content-Type", "application/problem+json")
        sink.set_status(400)
        sink.send_body("{}")

        first = sink.to_response()
        second = sink.to_response()

        assert sink.headers == {"Content-Type": "application/problem+json"}
        assert first.headers["content-type"] == "application/problem+json"
        assert second.headers["content-type"] == "application/problem+json"

    def test_unsent_sink_cannot_build_response(self) -> None:
        """Building a response before a body was sent is an error."""
        with pytest.raises(RuntimeError):
            BufferedResponseSink().to_response()
