"""
Filesystem blob store for uploaded PDF bytes.

Stores each upload under its generated name inside a single directory.
Writes go through a temporary file and an atomic rename so a crashed
upload never leaves a truncated blob under the final name.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Union

from ..core import get_config, get_logger, BackendUnavailableError
from ..utils import ensure_directory, sanitize_filename

logger = get_logger(__name__)


class BlobStore:
    """
    Stores, checks and deletes raw PDF files.

    Paths handed out by store() are the opaque storage pointers kept on
    indexed documents; every other method accepts them back.
    """

    def __init__(self, base_dir: Union[str, Path] = None):
        """
        Initialize the store.

        Args:
            base_dir: Storage directory. Defaults to config value.
        """
        self.base_dir = Path(base_dir or get_config().paths.storage_directory)

    def store(self, data: bytes, name: str) -> Path:
        """
        Persist bytes under the given name.

        Args:
            data: Raw file content.
            name: Stored name, reduced to a safe basename.

        Returns:
            Path of the stored file.

        Raises:
            BackendUnavailableError: If the file cannot be written.
        """
        target = self.base_dir / sanitize_filename(name)

        try:
            ensure_directory(self.base_dir)
            fd, tmp_name = tempfile.mkstemp(dir=self.base_dir, prefix=".upload-")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, target)
        except OSError as e:
            raise BackendUnavailableError(
                f"Failed to store file: {e}",
                backend="storage",
                details={"name": name}
            )

        logger.debug(f"Stored {len(data)} bytes as {target.name}")
        return target

    def exists(self, path: Union[str, Path]) -> bool:
        """Check whether a stored blob is present."""
        return bool(path) and Path(path).is_file()

    def delete(self, path: Union[str, Path]) -> bool:
        """
        Delete a stored blob.

        Args:
            path: Storage pointer returned by store().

        Returns:
            True if a file was removed, False if it was already gone.

        Raises:
            BackendUnavailableError: If removal fails for another reason.
        """
        try:
            Path(path).unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise BackendUnavailableError(
                f"Failed to delete file: {e}",
                backend="storage",
                details={"path": str(path)}
            )

    def clear(self) -> int:
        """
        Delete every stored blob.

        Returns:
            Number of files removed.
        """
        if not self.base_dir.exists():
            return 0

        removed = 0
        for entry in self.base_dir.iterdir():
            try:
                if entry.is_dir():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
                removed += 1
            except OSError as e:
                raise BackendUnavailableError(
                    f"Failed to clear storage: {e}",
                    backend="storage",
                    details={"path": str(entry)}
                )

        logger.info(f"Cleared {removed} entries from {self.base_dir}")
        return removed
