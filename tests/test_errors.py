"""Tests for snapstatic.errors — exception hierarchy and error messages."""

import pytest

from snapstatic.errors import (
    ConfigurationError,
    SnapshotNotReady,
    SnapstaticError,
    SyncError,
)


class TestHierarchy:
    @pytest.mark.parametrize("cls", [ConfigurationError, SyncError, SnapshotNotReady])
    def test_subclasses_base(self, cls: type[Exception]) -> None:
        assert issubclass(cls, SnapstaticError)

    def test_base_is_exception(self) -> None:
        assert issubclass(SnapstaticError, Exception)


class TestSyncError:
    def test_message_names_root(self) -> None:
        err = SyncError("/srv/www", "permission denied")
        assert str(err) == "sync of '/srv/www' failed: permission denied"
        assert err.root == "/srv/www"
        assert err.detail == "permission denied"
