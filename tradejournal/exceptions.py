"""Exceptions raised by the trade journal."""


class JournalError(Exception):
    """Base class for trade journal errors."""


class NotAuthenticatedError(JournalError):
    """Raised when an operation needs a signed-in user."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class TradeNotFoundError(JournalError):
    """Raised when a trade id does not exist for the user."""

    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(f"Trade '{trade_id}' not found")


class PermissionDeniedError(JournalError):
    """Raised when a record belongs to another user."""

    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(f"Permission denied for trade '{trade_id}'")


class ChallengeNotReachedError(JournalError):
    """Raised when archiving a challenge below 100% progress."""

    def __init__(self, percentage: float):
        self.percentage = percentage
        super().__init__(
            f"Challenge is only {percentage:.1f}% complete; reach 100% before archiving"
        )


class CoachError(JournalError):
    """Raised when AI analysis is unavailable or fails."""
