"""Error taxonomy for the board store.

Every public operation either returns its value or raises one of these.
The HTTP layer turns them into status codes; callers that only want a
message can rely on ``str(error)``.
"""

from __future__ import annotations


class BoardStoreError(Exception):
    """Base exception for all board store failures"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BoardNotFoundError(BoardStoreError):
    """Raised when a board id has no matching row"""

    def __init__(self, board_id: str | None = None, message: str = "Board not found"):
        self.board_id = board_id
        super().__init__(message)


class StorageError(BoardStoreError):
    """Raised when the underlying store cannot be opened, read or written.

    The original driver exception is kept as ``__cause__``. Nothing is
    retried automatically; the caller may retry the whole operation.
    """

    pass


class MalformedInputError(BoardStoreError):
    """Raised for unparsable legacy/export files or unusable paths.

    Attributes:
        path: The file that could not be used, if any
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
