"""Base exception class for statewire.

Every statewire error is a mistake in the calling code: a malformed schema
or a misused model. None of them is retried, so the base carries only what
is needed to find and fix the mistake:

- `message`: What went wrong
- `subject`: The key, field path, index or event name at fault
- `hint`: How to change the calling code
"""

from typing import Any, Optional


class StatewireError(Exception):
    """
    Base exception for all statewire errors.

    Attributes:
        message: What went wrong, in terms of the caller's schema or model
        subject: The schema key, field path, index or event name at fault
        hint: Optional suggestion for how to fix the calling code
    """

    def __init__(self, message: str, subject: Any = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.subject = subject
        self.hint = hint

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Message followed by the fix suggestion, for display in the CLI."""
        if self.hint:
            return f"{self.message}\n\nSuggestion: {self.hint}"
        return self.message
