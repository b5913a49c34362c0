"""
Content-addressed attachment storage.
"""

import base64
from pathlib import Path
from typing import Callable, List, Optional

from ..models.core import AttachmentData, AttachmentRecord
from ..utils.config import StorageConfig
from ..utils.file_types import format_file_size, is_image, is_text_file, resolve_extension
from ..utils.hash_utils import content_id
from ..utils.logging_config import get_logger
from ..utils.metadata_store import MetadataStore, MetadataStoreError
from ..utils.timestamp_utils import days_to_ms, now_ms

logger = get_logger(__name__)


class AttachmentStoreError(Exception):
    """Custom exception for attachment storage errors."""
    pass


class AttachmentNotFoundError(AttachmentStoreError):
    """Raised when an attachment id has no stored record or blob."""
    pass


class AttachmentStore:
    """Stores blobs as ``{timestamp}_{id}{ext}`` files with metadata rows.

    The id is derived from content, so identical uploads share an id. Unless
    deduplication is enabled each save still writes its own blob and row.
    """

    def __init__(self, config: StorageConfig, metadata: Optional[MetadataStore] = None,
                 clock: Callable[[], int] = now_ms):
        """
        Initialize the attachment store.

        Args:
            config: Storage configuration
            metadata: Metadata store, built from ``config.metadata_path`` if None
            clock: Millisecond clock used for filenames and createdAt
        """
        self.config = config
        self.storage_dir = Path(config.storage_dir)
        self.metadata = metadata if metadata is not None else MetadataStore(config.metadata_path)
        self.clock = clock

    def initialize(self) -> None:
        """Create the storage directory and load the metadata document.

        Raises:
            AttachmentStoreError: If the storage directory cannot be created
        """
        try:
            if not self.storage_dir.exists():
                self.storage_dir.mkdir(parents=True, exist_ok=True)
                logger.info(f'Created storage directory: {self.storage_dir}')
        except OSError as e:
            logger.error(f'Failed to create storage directory {self.storage_dir}: {e}')
            raise AttachmentStoreError(f'Storage initialization failed: {e}')
        self.metadata.initialize()

    def save_attachment(self, content: bytes, name: str, mime_type: str) -> str:
        """Persist a blob and its metadata.

        Args:
            content: Raw bytes to store
            name: Original filename supplied by the caller
            mime_type: Caller-supplied content type

        Returns:
            Content-derived attachment id

        Raises:
            AttachmentStoreError: If the blob cannot be written
            MetadataStoreError: If the metadata row cannot be persisted
        """
        attachment_id = content_id(content)

        # Lookup, blob write and insert happen under one lock so concurrent
        # saves of the same bytes cannot both pass the dedup check.
        with self.metadata.lock:
            if self.config.deduplicate and self.metadata.find_one(attachment_id) is not None:
                logger.debug(f'Attachment already stored, skipping write: {name} ({attachment_id})')
                return attachment_id
            self._write_attachment(attachment_id, content, name, mime_type)

        logger.info(f'Saved attachment: {name} ({attachment_id})')
        return attachment_id

    def _write_attachment(self, attachment_id: str, content: bytes, name: str, mime_type: str) -> None:
        ext = resolve_extension(name, mime_type)
        timestamp = self.clock()
        blob_path = self.storage_dir / f'{timestamp}_{attachment_id}{ext}'

        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            blob_path.write_bytes(content)
        except OSError as e:
            logger.error(f'Failed to write attachment {name}: {e}')
            raise AttachmentStoreError(f'Attachment save failed: {e}')

        record = AttachmentRecord(id=attachment_id,
                                  name=name,
                                  size=len(content),
                                  mime_type=mime_type,
                                  ext=ext,
                                  created_at=timestamp)
        try:
            self.metadata.insert(record)
        except MetadataStoreError:
            # A blob without a row is unreachable, so roll the write back
            try:
                blob_path.unlink()
            except FileNotFoundError:
                pass
            raise

    def get_attachment(self, attachment_id: str) -> Optional[AttachmentData]:
        """Look up an attachment and resolve its blob file.

        Returns:
            AttachmentData, or None if there is no record or no matching blob
        """
        record = self.metadata.find_one(attachment_id)
        if record is None:
            return None

        blobs = self._find_blobs(attachment_id)
        if not blobs:
            logger.warning(f'File not found in storage: {attachment_id}')
            return None

        return AttachmentData(record=record, path=blobs[0])

    def get_attachment_content(self, attachment_id: str) -> str:
        """Render an attachment for a language model.

        Text is returned decoded, images as a base64 data URI, and anything else
        as a short placeholder naming the file, its type and size.

        Raises:
            AttachmentNotFoundError: If the attachment does not exist
            AttachmentStoreError: If the blob cannot be read
        """
        data = self.get_attachment(attachment_id)
        if data is None:
            raise AttachmentNotFoundError(f'Attachment not found: {attachment_id}')

        record = data.record
        try:
            raw = data.path.read_bytes()
        except OSError as e:
            logger.error(f'Failed to read attachment {attachment_id}: {e}')
            raise AttachmentStoreError(f'Attachment read failed: {e}')

        if is_text_file(record.mime_type, record.name):
            return raw.decode('utf-8', errors='replace')

        if is_image(record.mime_type):
            encoded = base64.b64encode(raw).decode('ascii')
            return f'data:{record.mime_type};base64,{encoded}'

        return f'[File: {record.name} ({record.mime_type}, {format_file_size(record.size)})]'

    def delete_attachment(self, attachment_id: str) -> bool:
        """Remove an attachment's blob files and metadata rows.

        Missing blobs are ignored, so repeated deletes are safe.

        Returns:
            True if a record existed and was removed, False otherwise

        Raises:
            AttachmentStoreError: If a blob exists but cannot be removed
        """
        if self.metadata.find_one(attachment_id) is None:
            return False

        for blob in self._find_blobs(attachment_id):
            try:
                blob.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.error(f'Failed to remove attachment blob {blob}: {e}')
                raise AttachmentStoreError(f'Attachment delete failed: {e}')

        self.metadata.delete(attachment_id)
        logger.info(f'Deleted attachment: {attachment_id}')
        return True

    def cleanup_old_files(self, max_age_ms: Optional[int] = None) -> int:
        """Delete every attachment created strictly before now - max_age_ms.

        A failure on one attachment is logged and the sweep continues.

        Args:
            max_age_ms: Age threshold, ``config.max_age_days`` if None

        Returns:
            Number of attachments removed
        """
        if max_age_ms is None:
            max_age_ms = days_to_ms(self.config.max_age_days)

        threshold = self.clock() - max_age_ms
        expired = self.metadata.find_many(created_before=threshold)

        removed = 0
        for record in expired:
            try:
                if self.delete_attachment(record.id):
                    removed += 1
            except Exception as e:
                logger.error(f'Failed to clean up attachment {record.id}: {e}')

        if removed > 0:
            logger.info(f'Cleaned up {removed} old files')
        else:
            logger.debug('No old files found for cleanup')
        return removed

    def _find_blobs(self, attachment_id: str) -> List[Path]:
        """Scan the storage directory for files whose name contains the id."""
        try:
            entries = sorted(self.storage_dir.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error(f'Failed to list storage directory {self.storage_dir}: {e}')
            raise AttachmentStoreError(f'Storage scan failed: {e}')
        return [entry for entry in entries if attachment_id in entry.name and entry.is_file()]
