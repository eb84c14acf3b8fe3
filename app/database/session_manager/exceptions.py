"""
Errors raised by the Database session manager.
"""


class DatabaseNotInitialized(Exception):
    """A session was requested before Database.init() ran."""


class DatabaseTransactionError(Exception):
    """Commit or rollback of a request session failed; wraps the SQLAlchemy error."""
