"""Exception types raised by smart_retry.

Operation failures are never raised by the executor; they are returned in a
RetryOutcome. The exceptions here cover faults in the library itself.
"""


class SmartRetryError(Exception):
    """Base class for errors raised by smart_retry."""


class FailureStoreError(SmartRetryError):
    """Raised when the failure log cannot be read, decoded or written.

    Attributes:
        path: Location of the backing store, when it has one
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
