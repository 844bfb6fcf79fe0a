from __future__ import annotations

from typing import Any


class InvalidInput(ValueError):
    """Raised when loan terms, a loan record or a payment amount are unusable.

    ``field`` names the offending input and ``value`` holds what was passed,
    so form layers can attach the message to the right control.
    """

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")
