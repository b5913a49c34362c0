"""
File-backed metadata store for attachment records.

A single JSON document of the form ``{"files": [...]}`` holds every
AttachmentRecord. Each mutation rewrites the whole document atomically.
"""

import threading
from pathlib import Path
from typing import List, Optional

from ..models.core import AttachmentRecord
from .json_utils import read_json_document, write_json_atomic
from .logging_config import get_logger

logger = get_logger(__name__)

COLLECTION_KEY = 'files'


class MetadataStoreError(Exception):
    """Custom exception for metadata persistence errors."""
    pass


class MetadataStore:
    """Minimal document store over one JSON-serialized collection.

    Mutations are serialized through a re-entrant lock and the in-memory
    collection is only replaced after the new document has been persisted, so
    a failed write leaves the store exactly as it was.
    """

    def __init__(self, path: Path):
        """
        Initialize the store.

        Args:
            path: Location of the JSON metadata document
        """
        self.path = Path(path)
        self._records: List[AttachmentRecord] = []
        self._lock = threading.RLock()

    def initialize(self) -> None:
        """Load the document, or create an empty one if missing or unreadable.

        Rows that do not parse as records are skipped with a warning; the
        remaining rows are kept and the document on disk is left untouched.

        Raises:
            MetadataStoreError: If an empty document cannot be written
        """
        with self._lock:
            try:
                document = read_json_document(self.path)
            except FileNotFoundError:
                logger.info(f'Metadata document not found, creating: {self.path}')
                document = None
            except (OSError, ValueError) as e:
                logger.warning(f'Metadata document unreadable, starting empty: {self.path} ({e})')
                document = None

            rows = document.get(COLLECTION_KEY) if isinstance(document, dict) else None
            if not isinstance(rows, list):
                if document is not None:
                    logger.warning(f'Metadata document has no {COLLECTION_KEY!r} list, starting empty: {self.path}')
                self._persist([])
                self._records = []
                return

            records = []
            for index, row in enumerate(rows):
                try:
                    records.append(AttachmentRecord.from_dict(row))
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(f'Skipping malformed metadata row {index} in {self.path}: {e!r}')
            self._records = records
            logger.debug(f'Loaded {len(records)} metadata records from {self.path}')

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding the collection; hold it to make a lookup and insert atomic."""
        return self._lock

    def insert(self, record: AttachmentRecord) -> None:
        """Append one record and persist the full collection.

        Raises:
            MetadataStoreError: If the document cannot be written
        """
        with self._lock:
            updated = self._records + [record]
            self._persist(updated)
            self._records = updated

    def find_one(self, record_id: str) -> Optional[AttachmentRecord]:
        """Return the first record with the given id, or None."""
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return record
        return None

    def find_many(self, created_before: Optional[int] = None) -> List[AttachmentRecord]:
        """Return records created strictly before ``created_before``.

        Args:
            created_before: Millisecond timestamp threshold, all records if None
        """
        with self._lock:
            if created_before is None:
                return list(self._records)
            return [record for record in self._records if record.created_at < created_before]

    def delete(self, record_id: str) -> int:
        """Remove every record with the given id and persist.

        Returns:
            Number of records removed

        Raises:
            MetadataStoreError: If the document cannot be written
        """
        with self._lock:
            updated = [record for record in self._records if record.id != record_id]
            removed = len(self._records) - len(updated)
            if removed == 0:
                return 0
            self._persist(updated)
            self._records = updated
            return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _persist(self, records: List[AttachmentRecord]) -> None:
        try:
            write_json_atomic(self.path, {COLLECTION_KEY: [record.to_dict() for record in records]})
        except OSError as e:
            logger.error(f'Failed to persist metadata document {self.path}: {e}')
            raise MetadataStoreError(f'Failed to persist metadata: {e}')
