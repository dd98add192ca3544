"""
File Comparator

Byte-exact equality check between two files. Sizes are compared first;
content is then streamed in lock-step chunks so memory use stays bounded
regardless of file size.

Author: FileFlow Project
License: MIT
"""

import os
from typing import Optional

from ..config.config_loader import get_settings
from ..errors import FileAccessError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _stat_size(path: str) -> int:
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise FileAccessError(path, cause=e) from e


def _open(path: str):
    try:
        return open(path, 'rb')
    except OSError as e:
        raise FileAccessError(path, cause=e) from e


def _read(handle, size: int, path: str) -> bytes:
    # Fill the whole chunk so both streams stay aligned on short reads
    chunks = []
    remaining = size
    try:
        while remaining > 0:
            data = handle.read(remaining)
            if not data:
                break
            chunks.append(data)
            remaining -= len(data)
    except OSError as e:
        raise FileAccessError(path, cause=e) from e
    return b"".join(chunks)


def files_equal(path_a: str, path_b: str, buffer_size: Optional[int] = None) -> bool:
    """
    Check whether two files have byte-identical content.
    
    Args:
        path_a: First file
        path_b: Second file
        buffer_size: Chunk size for streamed reads (defaults to settings)
        
    Returns:
        True if both files hold exactly the same bytes
        
    Raises:
        FileAccessError: If either file cannot be stat'd, opened or read
    """
    chunk_size = buffer_size or get_settings().buffer_size
    
    # Quick check: if sizes differ, files are not identical
    size_a = _stat_size(path_a)
    size_b = _stat_size(path_b)
    if size_a != size_b:
        logger.debug(f"Size mismatch: {path_a} ({size_a}) vs {path_b} ({size_b})")
        return False
    
    with _open(path_a) as file_a, _open(path_b) as file_b:
        while True:
            chunk_a = _read(file_a, chunk_size, path_a)
            chunk_b = _read(file_b, chunk_size, path_b)
            
            if chunk_a != chunk_b:
                logger.debug(f"Content mismatch: {path_a} vs {path_b}")
                return False
            
            if not chunk_a:
                return True
