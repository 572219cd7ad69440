class PlatformError(Exception):
    """Base class for failures talking to an external platform."""

    def __init__(self, message="", platform=None, handle=None):
        super().__init__(message)
        self.platform = platform
        self.handle = handle


class NetworkError(PlatformError):
    """Unreachable host, timeout or exhausted retries."""


class ParseError(PlatformError):
    """Upstream answered but the payload did not have the expected shape."""


class NotFound(PlatformError):
    """The handle does not exist on the platform."""


class NoContestData(PlatformError):
    """The handle exists but has never taken part in a rated contest."""


class DuplicateKeyConflict(Exception):
    """
    Raised by unordered bulk inserts after every non-conflicting row was written.
    """

    def __init__(self, model_label, duplicates, inserted):
        self.model_label = model_label
        self.duplicates = list(duplicates)
        self.inserted = inserted
        super().__init__(
            f"{len(self.duplicates)} duplicate(s) in {model_label}, {inserted} inserted"
        )
