"""
JSON file storage for the book catalog.

The whole catalog lives in a single JSON array of book objects with
their reviews embedded.  ``CatalogStore`` reloads the file on every
call; there is no in‑process cache.  Writes go to a temporary file in
the same directory which is then moved over the catalog, so a reader
never sees a half written file.

Review mutations are a load‑modify‑save sequence.  Callers must hold
``CatalogStore.lock`` for the whole sequence, otherwise two concurrent
writers can silently overwrite each other's changes.
"""

import json
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from .config import Settings, settings
from .errors import StorageError
from ..schemas.book import Book

logger = logging.getLogger(__name__)


def _default_file_mode() -> int:
    """Mode a plain ``open(path, "w")`` would give a new file."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def get_catalog_path(app_settings: Optional[Settings] = None) -> str:
    """Compute the path to the catalog file.

    If ``catalog_path`` is absolute it is used directly.  Otherwise it
    is resolved relative to the project root.
    """
    catalog_path = (app_settings or settings).catalog_path
    if os.path.isabs(catalog_path):
        return catalog_path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / catalog_path).resolve())


class CatalogStore:
    """Load and save the catalog file."""

    def __init__(self, path: str) -> None:
        self.path = path
        # One lock per catalog resource.
        self.lock = threading.Lock()

    def load_all(self) -> List[Book]:
        """Read and parse the full catalog.

        Raises
        ------
        StorageError
            If the file is missing, unreadable, not valid JSON or does
            not hold an array of books.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.error("Catalog file %s does not exist", self.path)
            raise StorageError(f"Catalog file {self.path} does not exist")
        except (OSError, ValueError) as e:
            logger.error("Failed to read catalog %s: %s", self.path, e)
            raise StorageError(f"Failed to read catalog: {e}") from e
        if not isinstance(data, list):
            logger.error("Catalog %s does not contain a JSON array", self.path)
            raise StorageError("Catalog must be a JSON array of books")
        try:
            return [Book.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error("Catalog %s contains an invalid book: %s", self.path, e)
            raise StorageError(f"Catalog contains an invalid book: {e}") from e

    def save_all(self, books: Sequence[Book]) -> None:
        """Serialise ``books`` and replace the catalog file.

        Raises
        ------
        StorageError
            If the temporary file cannot be written or moved into place.
        """
        payload = json.dumps([book.model_dump() for book in books], indent=2, ensure_ascii=False)
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".books-", suffix=".json", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            # mkstemp creates the file as 0600; keep the catalog readable as before.
            if os.path.exists(self.path):
                shutil.copymode(self.path, tmp_path)
            else:
                os.chmod(tmp_path, _default_file_mode())
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write catalog %s: %s", self.path, e)
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Failed to write catalog: {e}") from e
        logger.debug("Saved %d books to %s", len(books), self.path)

    def ensure_exists(self, seed_path: Optional[str] = None) -> None:
        """Create the catalog file on first run.

        The bundled seed catalog is copied into place when available,
        otherwise an empty array is written.  An existing catalog is
        never touched.
        """
        if os.path.exists(self.path):
            return
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        if seed_path and os.path.exists(seed_path):
            logger.info("Seeding catalog %s from %s", self.path, seed_path)
            shutil.copyfile(seed_path, self.path)
        else:
            logger.warning("No seed catalog found; creating empty catalog at %s", self.path)
            self.save_all([])
