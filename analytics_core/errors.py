"""Errors raised by the analytics core.

Unrecognized data values never raise; they resolve to documented defaults.
The errors here signal configuration or programming mistakes instead.
"""


class AnalyticsError(Exception):
    """Base exception for all analytics core errors."""

    pass


class UnknownPolicyError(AnalyticsError):
    """Raised when an adherence policy name is not registered.

    Attributes:
        name: Requested policy name
        available: Registered policy names
    """

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Unknown adherence policy '{name}'. Available: {', '.join(available)}")
