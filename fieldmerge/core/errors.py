"""Exceptions raised by the merge driver."""
from __future__ import annotations


class MergeConsistencyError(RuntimeError):
    """A field that passed the accessibility check could not be written.

    Signals a defect rather than bad input: callers are not expected to catch
    it and continue.
    """

    def __init__(self, field_name: str, destination_type: type, reason: str) -> None:
        super().__init__(
            f"Field '{field_name}' on {destination_type.__qualname__} was checked "
            f"accessible before copy but could not be written: {reason}"
        )
        self.field_name = field_name
        self.destination_type = destination_type
