"""Error taxonomy shared by the substrate and the pipelines."""

from __future__ import annotations


class LaneError(Exception):
    """Base class for every failure a pipeline can report."""


class SubstrateError(LaneError):
    """A task could not be scheduled or joined.

    Raised when the blocking lane refuses work (for example after shutdown),
    when spawned work raises something outside this taxonomy, or when a
    spawned task was cancelled underneath its handle.
    """


class FetchError(LaneError):
    """The fetch collaborator could not produce a response."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"request to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class NetworkError(FetchError):
    """Transport-level failure talking to the remote endpoint."""


class StatusError(NetworkError):
    """The remote endpoint answered with a non-success status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(url, f"HTTP status {status_code}")
        self.status_code = status_code


class DecodeError(LaneError):
    """The response body is not valid text."""


class HandleConsumedError(RuntimeError):
    """A task handle was awaited more than once."""


__all__ = [
    "LaneError",
    "SubstrateError",
    "FetchError",
    "NetworkError",
    "StatusError",
    "DecodeError",
    "HandleConsumedError",
]
