"""
Repository-level exceptions.
"""


class DuplicateReadingError(Exception):
    """Raised when a user already has a meter reading for the month."""

    def __init__(self, user_id, reading_date):
        self.user_id = user_id
        self.reading_date = reading_date
        super().__init__(
            f"User {user_id} already has a meter reading for {reading_date:%Y-%m}"
        )
