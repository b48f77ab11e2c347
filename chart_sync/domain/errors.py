"""Error taxonomy for a chart sync run."""


class SyncError(Exception):
    """Base class for fatal sync errors."""
    pass


class PreconditionFailure(SyncError):
    """Raised when the run cannot start or cannot safely continue."""
    pass


class SectionNotFound(PreconditionFailure):
    """Raised when a destination document lacks the expected heading."""

    def __init__(self, heading: str):
        super().__init__(f"Section heading not found: {heading!r}")
        self.heading = heading


class CommitFailure(SyncError):
    """Raised when staging or committing the synced documents fails."""
    pass


class WriteFailure(SyncError):
    """Raised when a destination document cannot be written."""
    pass
