"""A response writer that records written messages for inspection in tests."""

from __future__ import annotations

from typing import Any

from openflow.request import Header, Request, new_request


class ResponseRecorder:
    """Collects every message a handler writes as a request."""

    def __init__(self) -> None:
        self._requests: list[Request] = []

    def write(self, header: Header, body: Any) -> None:
        """Record the given message."""
        request = new_request(header.type, body)
        request.header = header.copy()
        self._requests.append(request)

    def _ensure_not_empty(self) -> None:
        if not self._requests:
            raise IndexError("ofptest: response list is empty")

    def first(self) -> Request:
        """Return the first recorded message."""
        self._ensure_not_empty()
        return self._requests[0]

    def last(self) -> Request:
        """Return the last recorded message."""
        self._ensure_not_empty()
        return self._requests[-1]

    def all(self) -> list[Request]:
        """Return all recorded messages in the order they were written."""
        return list(self._requests)