"""
Error Taxonomy

Exception hierarchy raised by every fileflow operation. Each error keeps
the offending path(s) and the underlying OS error so a failure can be
diagnosed without re-running the operation.

Author: FileFlow Project
License: MIT
"""

from typing import Optional


class FileFlowError(Exception):
    """Base class for all fileflow errors."""


class SameFileError(FileFlowError):
    """Source and destination refer to the same path. Nothing was touched."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Source and destination are the same: {path}")


class ResolutionExhaustedError(FileFlowError):
    """The naming strategy found no free candidate within the attempt cap."""

    def __init__(self, base_path: str, attempts: int):
        self.base_path = base_path
        self.attempts = attempts
        super().__init__(
            f"No available name for {base_path} after {attempts} attempts"
        )


class FileAccessError(FileFlowError):
    """
    An underlying stat/open/read/write call failed.

    Attributes:
        path: Path the failing call was made on
        other_path: Second path involved in the operation, if any
        cause: Originating OSError
    """

    action = "accessing"

    def __init__(
        self,
        path: str,
        cause: Optional[BaseException] = None,
        other_path: Optional[str] = None,
        message: Optional[str] = None
    ):
        self.path = path
        self.other_path = other_path
        self.cause = cause

        if message is None:
            target = f"{path} -> {other_path}" if other_path else path
            message = f"Failed {self.action} {target}"
            if cause is not None:
                message += f": {cause}"
        super().__init__(message)


class DirectoryCreationError(FileAccessError):
    """Intermediate destination directories could not be created."""

    action = "creating directory"


class CopyError(FileAccessError):
    """Streamed copy failed at open, write, flush, sync or chmod."""

    action = "copying"

    @property
    def src(self) -> str:
        return self.path

    @property
    def dst(self) -> Optional[str]:
        return self.other_path


class MoveError(FileAccessError):
    """Atomic rename failed."""

    action = "moving"

    @property
    def src(self) -> str:
        return self.path

    @property
    def dst(self) -> Optional[str]:
        return self.other_path

    @property
    def cross_device(self) -> bool:
        """True if the rename failed because src and dst are on different devices."""
        from .utils.file_ops import is_cross_device_error
        return is_cross_device_error(self.cause)


class RemovalError(FileAccessError):
    """
    The source could not be removed after the destination was completed.

    The destination already holds a correct copy; the source is a stale
    duplicate that the caller may clean up separately.
    """

    action = "removing original"

    def __init__(
        self,
        path: str,
        destination: str,
        cause: Optional[BaseException] = None
    ):
        self.destination = destination
        super().__init__(path, cause=cause)


class OperationCancelledError(FileFlowError):
    """A cancellation token was set while a copy was in progress."""

    def __init__(self, src: str, dst: str):
        self.src = src
        self.dst = dst
        super().__init__(f"Copy of {src} to {dst} was cancelled")
