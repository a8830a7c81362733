"""Exception hierarchy for safe merge."""

from typing import Any, Optional


class SafeMergeError(Exception):
    """
    Base exception for safe merge.

    Attributes:
        details: Optional structured information about the failure.
    """

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details = details or {}


class ContentMismatchError(SafeMergeError):
    """Raised when a file exists on both sides with different content."""

    def __init__(self, source: str, destination: str, source_hash: str, destination_hash: str) -> None:
        super().__init__(
            f"Content differs: {source} ({source_hash}) and {destination} ({destination_hash})",
            details={
                "source": source,
                "destination": destination,
                "source_hash": source_hash,
                "destination_hash": destination_hash,
            },
        )
        self.source = source
        self.destination = destination
        self.source_hash = source_hash
        self.destination_hash = destination_hash


class NonRegularFileError(SafeMergeError):
    """Raised when a copy source or existing destination is not a regular file."""

    def __init__(self, path: str, role: str, mode: int) -> None:
        super().__init__(
            f"non-regular {role} file {path} (mode {mode:o})",
            details={"path": path, "role": role, "mode": mode},
        )
        self.path = path
        self.role = role
        self.mode = mode


class InvalidActionError(SafeMergeError):
    """Raised when a plan contains an action the executor does not know."""

    def __init__(self, action: Any) -> None:
        super().__init__(f"Invalid plan entry: {action!r}", details={"action": action})
        self.action = action
