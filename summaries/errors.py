"""
Failure classifications raised by the summary service.

Each class carries the HTTP status it maps to and a short caller-facing reason.
"""

from typing import List, Optional


class SummaryError(Exception):
    """Base class for caller-facing summary failures."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(SummaryError):
    """No verified caller identity is available."""

    status_code = 401

    def __init__(self, message: str = "Not authorized, no valid token"):
        super().__init__(message)


class InvalidInput(SummaryError):
    """Required fields are missing or blank."""

    status_code = 400

    def __init__(self, message: str, violations: Optional[List[str]] = None):
        super().__init__(message)
        self.violations = violations or [message]


class NotFound(SummaryError):
    """Identifier is malformed or matches no record."""

    status_code = 404

    def __init__(self, message: str = "Summary not found"):
        super().__init__(message)


class Forbidden(SummaryError):
    """Target exists but the caller is not its owner."""

    status_code = 403

    def __init__(self, action: str):
        super().__init__(f"Not authorized to {action} this summary")
        self.action = action
