"""
Copy Engine

Streams bytes from a source file to a destination through a bounded
buffer, carries over the source's permission bits, and fsyncs the
destination before reporting success. Naming conflicts are not resolved
here; callers decide whether the destination may be overwritten.

Author: FileFlow Project
License: MIT
"""

import os
import stat
from typing import Optional

from ..config.config_loader import get_settings
from ..config.schema import Settings
from ..errors import CopyError, FileAccessError, OperationCancelledError, SameFileError
from ..utils.file_ops import ensure_parent_directory, same_path
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _discard_partial(dst: str) -> None:
    try:
        os.remove(dst)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove partial copy {dst}: {e}")


def copy_file(
    src: str,
    dst: str,
    settings: Optional[Settings] = None,
    cancel=None,
    preserve_mode: bool = True
) -> None:
    """
    Copy a file's content from src to dst.
    
    The destination is created or truncated. Content is streamed in
    settings.buffer_size chunks, flushed and fsynced before returning.
    
    Args:
        src: Source file path
        dst: Destination file path
        settings: Settings to use (defaults to the process-wide settings)
        cancel: Optional token with is_set(), polled between chunks
        preserve_mode: Give dst the source's permission bits; otherwise
            settings.file_mode is used
        
    Raises:
        SameFileError: If src and dst are the same path
        FileAccessError: If the source cannot be opened or stat'd
        CopyError: If creating, writing, syncing or chmod-ing dst fails
        OperationCancelledError: If cancel was set mid-copy
    """
    settings = settings or get_settings()
    
    if same_path(src, dst):
        raise SameFileError(os.fspath(src))
    
    try:
        source_file = open(src, 'rb')
    except OSError as e:
        logger.error(f"Cannot open source {src}: {e}")
        raise FileAccessError(src, cause=e) from e
    
    with source_file:
        try:
            source_mode = stat.S_IMODE(os.fstat(source_file.fileno()).st_mode)
        except OSError as e:
            raise FileAccessError(src, cause=e) from e
        
        mode = source_mode if preserve_mode else settings.file_mode
        
        try:
            fd = os.open(dst, os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0), mode)
        except OSError as e:
            logger.error(f"Cannot create destination {dst}: {e}")
            raise CopyError(src, cause=e, other_path=dst) from e
        
        copied = 0
        try:
            with os.fdopen(fd, 'wb', buffering=settings.buffer_size) as dest_file:
                while True:
                    if cancel is not None and cancel.is_set():
                        raise OperationCancelledError(os.fspath(src), os.fspath(dst))
                    
                    try:
                        chunk = source_file.read(settings.buffer_size)
                    except OSError as e:
                        raise FileAccessError(src, cause=e) from e
                    if not chunk:
                        break
                    dest_file.write(chunk)
                    copied += len(chunk)
                
                dest_file.flush()
                os.fsync(dest_file.fileno())
            
            # Creation mode is narrowed by the umask
            os.chmod(dst, mode)
        except OperationCancelledError:
            logger.warning(f"Copy cancelled after {copied} bytes: {src} -> {dst}")
            _discard_partial(dst)
            raise
        except FileAccessError:
            _discard_partial(dst)
            raise
        except OSError as e:
            logger.error(f"Copy failed {src} -> {dst}: {e}")
            _discard_partial(dst)
            raise CopyError(src, cause=e, other_path=dst) from e
    
    logger.debug(f"Copied {copied} bytes: {src} -> {dst}")


def copy_file_creating_path(
    src: str,
    dst: str,
    settings: Optional[Settings] = None,
    cancel=None
) -> None:
    """
    Copy a file, creating any missing destination directories first.
    
    Args:
        src: Source file path
        dst: Destination file path
        settings: Settings to use (defaults to the process-wide settings)
        cancel: Optional cancellation token
        
    Raises:
        SameFileError: If src and dst are the same path
        DirectoryCreationError: If the destination directory cannot be created
        FileAccessError: If the source cannot be read
        CopyError: If writing the destination fails
    """
    settings = settings or get_settings()
    
    if same_path(src, dst):
        raise SameFileError(os.fspath(src))
    
    ensure_parent_directory(dst, mode=settings.dir_mode)
    copy_file(src, dst, settings=settings, cancel=cancel)
