"""Filesystem storage for screenshot previews."""

import logging
from pathlib import Path, PurePosixPath, PureWindowsPath

from levelnotes.utils.exceptions import BlobStoreError, InvalidPathError, NotFoundError

logger = logging.getLogger(__name__)

PREVIEW_DIR = "previews"


class BlobStore:
    """Reads and writes preview images below a single root directory."""

    def __init__(self, root: Path):
        """
        Initialize the blob store.

        Args:
            root: Directory all locators are resolved against
        """
        self.root = Path(root)

    def save(self, note_id: str, raw_bytes: bytes) -> str:
        """
        Write a PNG preview for a note.

        Args:
            note_id: Owning note ID (names the file)
            raw_bytes: Decoded image bytes

        Returns:
            Locator relative to the root, e.g. ``previews/<id>.png``

        Raises:
            BlobStoreError: If the file cannot be written
        """
        locator = f"{PREVIEW_DIR}/{note_id}.png"
        self._check_locator(locator)
        target = self.root / locator
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(raw_bytes)
        except OSError as e:
            raise BlobStoreError(f"Could not write preview {locator}: {e}") from e
        logger.debug(f"Saved preview {locator} ({len(raw_bytes)} bytes)")
        return locator

    def read(self, locator: str) -> bytes:
        """
        Read a blob by its relative locator.

        Raises:
            InvalidPathError: If the locator is absolute or climbs out of the root
            NotFoundError: If no such blob exists
            BlobStoreError: If the file exists but cannot be read
        """
        self._check_locator(locator)
        path = self.root / locator
        if not path.is_file():
            raise NotFoundError("File")
        try:
            return path.read_bytes()
        except OSError as e:
            raise BlobStoreError(f"Could not read {locator}: {e}") from e

    def delete(self, locator: str) -> bool:
        """Remove a blob if present. Returns True when a file was removed."""
        self._check_locator(locator)
        path = self.root / locator
        try:
            if path.is_file():
                path.unlink()
                return True
        except OSError as e:
            logger.error(f"Error deleting blob {locator}: {e}")
        return False

    @staticmethod
    def content_type(locator: str) -> str:
        """Media type served for a locator."""
        if PurePosixPath(locator).suffix.lower() == ".png":
            return "image/png"
        return "application/octet-stream"

    @staticmethod
    def _check_locator(locator: str) -> None:
        # Reject both POSIX and Windows spellings of absolute/parent paths
        for flavour in (PurePosixPath(locator), PureWindowsPath(locator)):
            if flavour.is_absolute() or flavour.anchor or ".." in flavour.parts:
                raise InvalidPathError(f"Invalid file path: {locator}")
        if not locator.strip():
            raise InvalidPathError("Empty file path")
