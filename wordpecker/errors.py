"""Error taxonomy for the learning core."""


class WordPeckerError(Exception):
    """Base class for all WordPecker errors."""


class ContentFetchError(WordPeckerError):
    """The remote content source was unreachable or returned malformed data."""


class InvalidStateTransition(WordPeckerError):
    """A session action was invoked in a step that does not allow it."""

    def __init__(self, action: str, step: str, reason: str = ""):
        self.action = action
        self.step = step
        self.reason = reason
        message = f"{action}() is not valid in step {step}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PersistenceWriteError(WordPeckerError):
    """The progress store could not write to its backend."""
