"""Exception hierarchy for blendscan."""


class BlendscanError(Exception):
    """Base exception for all blendscan errors."""


class PathNotFoundError(BlendscanError):
    """Raised when a scan root does not exist."""


class JobNotFoundError(BlendscanError):
    """Raised when a scan id was never issued or has been disposed."""


class JobStillRunningError(BlendscanError):
    """Raised when disposing a scan that has not finished."""


class NoThumbnailError(BlendscanError):
    """Raised when a file carries no embedded preview."""


class OpenPathError(BlendscanError):
    """Raised when the OS refuses to open a path."""
