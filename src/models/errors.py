"""
Domain errors raised by the analytics core.
"""


class ReviewValidationError(ValueError):
    """A review violates the cleaned-input contract (rating range, month, counts)."""


class EmptyGroupError(ValueError):
    """NPS or a mean was requested for a group with no members."""

    def __init__(self, group=None):
        message = "undefined NPS for empty group"
        if group is not None:
            message = f"{message}: {group!r}"
        super().__init__(message)
        self.group = group
