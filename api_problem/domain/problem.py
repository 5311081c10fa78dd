"""
The problem value: a structured description of an API error.

Follows the RFC 7807 shape (status, title, detail, type) with
extension members spread at the top level of the serialized body.
Instances are immutable and carry everything needed to be written
to a response as-is. No framework imports and no IO.
"""

import json
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from api_problem.domain.errors import InvalidProblemError

OPTION_KEYS = frozenset({"status", "title", "detail", "type", "additional"})
JSON_SEPARATORS = (",", ":")
PROBLEM_CONTENT_TYPE = "application/problem+json"


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidProblemError(field, "must be a string")
    if not value:
        raise InvalidProblemError(field, "must not be empty")
    return value


def _dump(body: Mapping[str, Any]) -> str:
    return json.dumps(body, separators=JSON_SEPARATORS, default=str, allow_nan=False)


def _check_additional(additional: Mapping[str, Any]) -> None:
    if not all(isinstance(key, str) for key in additional):
        raise InvalidProblemError("additional", "keys must be strings")
    try:
        _dump(dict(additional))
    except (TypeError, ValueError) as exc:
        raise InvalidProblemError(
            "additional", f"is not JSON serializable: {exc}"
        ) from exc


class ApiProblem(Exception):
    """A well-formed API error, raisable from request handling code.

    Attributes:
        status: HTTP status code (positive integer).
        title: Short human-readable summary of the problem category.
        detail: Explanation specific to this occurrence.
        type: Optional URI/string identifying the problem category.
        additional: Read-only extension members merged into the body.
    """

    def __init__(
        self,
        *,
        status: int,
        title: str,
        detail: str,
        type: Optional[str] = None,
        additional: Optional[Mapping[str, Any]] = None,
    ) -> None:
        # bool is an int subclass but never a status code
        if isinstance(status, bool) or not isinstance(status, int):
            raise InvalidProblemError("status", "must be an integer")
        if status <= 0:
            raise InvalidProblemError("status", "must be positive")
        if type is not None:
            _require_text("type", type)
        if additional is not None:
            if not isinstance(additional, Mapping):
                raise InvalidProblemError("additional", "must be a mapping")
            _check_additional(additional)

        self._status = status
        self._title = _require_text("title", title)
        self._detail = _require_text("detail", detail)
        self._type = type
        self._additional = MappingProxyType(dict(additional or {}))
        super().__init__(self._detail)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ApiProblem":
        """Build a problem from an options mapping.

        Args:
            options: Mapping with status, title, detail and optionally
                type and additional.

        Returns:
            The constructed problem.

        Raises:
            InvalidProblemError: If a key is unknown or a field is invalid.
        """
        unknown = sorted(set(options) - OPTION_KEYS)
        if unknown:
            raise InvalidProblemError(unknown[0], "is not a problem option")
        for required in ("status", "title", "detail"):
            if required not in options:
                raise InvalidProblemError(required, "is required")
        return cls(**options)

    @property
    def status(self) -> int:
        return self._status

    @property
    def title(self) -> str:
        return self._title

    @property
    def detail(self) -> str:
        return self._detail

    @property
    def type(self) -> Optional[str]:
        return self._type

    @property
    def additional(self) -> Mapping[str, Any]:
        return self._additional

    def with_additional(self, **extra: Any) -> "ApiProblem":
        """Return a copy whose extension members are overlaid with ``extra``."""
        merged = dict(self._additional)
        merged.update(extra)
        return ApiProblem(
            status=self._status,
            title=self._title,
            detail=self._detail,
            type=self._type,
            additional=merged,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the body as a flat mapping.

        Standard members come first; extension members are overlaid on
        top of them, so an extension key wins over a standard one.
        """
        body: dict[str, Any] = {
            "status": self._status,
            "title": self._title,
            "detail": self._detail,
        }
        if self._type is not None:
            body["type"] = self._type

        for key, value in self._additional.items():
            body[key] = value
        return body

    def to_json(self) -> str:
        """Serialize the body as compact JSON text."""
        return _dump(self.to_dict())

    def __repr__(self) -> str:
        return (
            f"ApiProblem(status={self._status!r}, title={self._title!r}, "
            f"detail={self._detail!r}, type={self._type!r}, "
            f"additional={dict(self._additional)!r})"
        )
