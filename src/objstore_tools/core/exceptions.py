"""Exception hierarchy for objstore-tools."""


class ObjstoreToolsError(Exception):
    """Base exception for all objstore-tools errors."""

    pass


class ValidationError(ObjstoreToolsError):
    """Raised when validation fails."""

    pass


class InvalidArguments(ValidationError):
    """Raised when a command's arguments are missing or malformed."""

    pass


class OperationError(ObjstoreToolsError):
    """Raised when a step of an object operation fails.

    Carries the name of the failing step and the underlying cause so callers
    can report both.
    """

    def __init__(self, operation: str, cause: object):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation}: {cause}")


class TransportError(OperationError):
    """Raised when a remote call fails (network, auth, or remote rejection)."""

    pass


class NotFound(TransportError):
    """Raised when the remote service reports the object does not exist."""

    pass


class ProtocolError(TransportError):
    """Raised when a raw HTTP request returns a non-2xx status."""

    def __init__(self, operation: str, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(operation, f"status {status_code} {reason}".rstrip())


class LocalIOError(OperationError):
    """Raised when a local file cannot be opened, stat'ed, read or written."""

    pass


class FileTooLarge(ObjstoreToolsError):
    """Raised when a file is too large to upload as a single object."""

    def __init__(self, path: str, size: int, limit: int):
        self.path = path
        self.size = size
        self.limit = limit
        super().__init__(
            f"{path} is too large to upload as a single object "
            f"({size} bytes, max {limit} bytes)"
        )
