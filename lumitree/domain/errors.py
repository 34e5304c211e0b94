"""
Error taxonomy for the interaction core.

None of these are meant to reach the host process: the poll loop turns
them into a status, a "no hand" frame, or a logged release failure.
"""
from __future__ import annotations
from typing import Optional


class LumitreeError(Exception):
    """Base class for all lumitree errors."""


class InitializationFailure(LumitreeError):
    """Video stream or landmark session could not be acquired."""


class InvalidInput(LumitreeError, ValueError):
    """A landmark snapshot does not have the expected shape."""


class ResourceReleaseFailure(LumitreeError):
    """Releasing one resource failed during teardown."""

    def __init__(self, resource: str, cause: Optional[BaseException] = None) -> None:
        self.resource = resource
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to release {resource}{detail}")
