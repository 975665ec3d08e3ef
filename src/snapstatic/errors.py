"""Snapstatic exception hierarchy.

Shared across the snapshot builder, the handler, and the dispatcher so
every module raises and catches the same types.
"""


class SnapstaticError(Exception):
    """Base for all snapstatic-specific errors."""


class ConfigurationError(SnapstaticError):
    """Raised when handler or server configuration is invalid.

    Always raised at construction time, never while serving.
    """


class SyncError(SnapstaticError):
    """A rebuild failed and no new snapshot was published.

    The previously active snapshot (if any) stays in service. ``str()``
    of this error is the description sent back to a rebuild trigger.
    """

    def __init__(self, root: str, detail: str) -> None:
        super().__init__(f"sync of {root!r} failed: {detail}")
        self.root = root
        self.detail = detail


class SnapshotNotReady(SnapstaticError):  # noqa: N818
    """A request arrived before the first sync completed."""
