"""
Unit tests for the error taxonomy
"""
from boardstore.core.exceptions import (
    BoardNotFoundError,
    BoardStoreError,
    MalformedInputError,
    StorageError,
)


class TestCustomExceptions:
    """Test custom exception classes"""

    def test_board_not_found_error(self):
        """Should carry the id and the fixed message"""
        error = BoardNotFoundError("abc")

        assert isinstance(error, BoardStoreError)
        assert error.board_id == "abc"
        assert str(error) == "Board not found"

    def test_storage_error(self):
        """Should keep the driver message"""
        error = StorageError("database is locked")

        assert isinstance(error, BoardStoreError)
        assert error.message == "database is locked"

    def test_malformed_input_error(self):
        """Should carry the offending path"""
        error = MalformedInputError("bad json", path="/tmp/export.json")

        assert isinstance(error, BoardStoreError)
        assert error.path == "/tmp/export.json"
        assert "bad json" in str(error)
