from typing import Optional


class DatabaseError(Exception):
    pass


class NotFoundError(DatabaseError):
    """Requested document does not exist."""

    def __init__(self, message: str = "Datapoint does not exist"):
        super().__init__(message)
        self.message = message


class ConflictError(DatabaseError):
    """Write violated a uniqueness constraint.

    Attributes:
        errors: list of `{"field", "location", "messages"}` entries,
            one for each conflicting field
    """

    def __init__(self, message: str = "Validation Error", errors: Optional[list[dict]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []
