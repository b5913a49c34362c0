"""
Recursive resource indexer: turns a resource directory tree into classified records.
"""

import os
from collections import Counter
from pathlib import Path
from typing import List, Optional

from ..models.core import ResourceRecord, ResourceStats
from ..utils.config import ResourceConfig
from ..utils.file_types import extension_of, mime_type_from_extension
from ..utils.hash_utils import path_id
from ..utils.logging_config import get_logger
from ..utils.timestamp_utils import to_iso
from .resource_classifier import classify_protocol, classify_source

logger = get_logger(__name__)


class ResourceIndexerError(Exception):
    """Custom exception for resource indexer errors."""
    pass


class ResourceNotFoundError(ResourceIndexerError):
    """Raised when a resource id does not resolve to a scanned file."""
    pass


def build_reference(protocol: str, folder_path: List[str], filename: str) -> str:
    """Build ``@protocol://<folders after the first>//<filename>``."""
    return f"@{protocol}://{'/'.join(folder_path[1:])}//{filename}"


def extract_description(path: Path, max_length: int = 100) -> Optional[str]:
    """Return the first non-empty, non-heading line of a text file.

    Returns:
        The line truncated to ``max_length`` characters, or None if the file
        has no such line or cannot be read as UTF-8 text
    """
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f'No description for {path}: {e}')
        return None

    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith('#'):
            return stripped[:max_length]
    return None


class ResourceIndexer:
    """Scans the configured resource root into a flat list of ResourceRecord.

    Nothing is cached: every call re-walks the filesystem.
    """

    def __init__(self, config: ResourceConfig):
        self.config = config
        self.root = Path(config.resource_root)

    def scan_resources(self, category: Optional[str] = None) -> List[ResourceRecord]:
        """Walk the resource root depth-first.

        Args:
            category: Optional category filter applied after the scan

        Returns:
            Classified resources; empty if the root does not exist
        """
        if not self.root.is_dir():
            logger.warning(f'Resource root does not exist: {self.root}')
            return []

        logger.info(f'Scanning resource root: {self.root}')
        resources: List[ResourceRecord] = []
        self._scan_directory(self.root, [], resources)

        if category:
            resources = [resource for resource in resources if resource.category == category]

        logger.info(f'Scan complete, found {len(resources)} resources')
        return resources

    def find_resource(self, resource_id: str) -> ResourceRecord:
        """Resolve a resource id through a fresh scan.

        Raises:
            ResourceNotFoundError: If no scanned resource has this id
        """
        for resource in self.scan_resources():
            if resource.id == resource_id:
                return resource
        raise ResourceNotFoundError(f'Resource not found: {resource_id}')

    def read_resource_content(self, resource_id: str) -> str:
        """Read a resource file's text by id.

        Raises:
            ResourceNotFoundError: If the id does not resolve
            ResourceIndexerError: If the file cannot be read
        """
        resource = self.find_resource(resource_id)
        try:
            return Path(resource.path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f'Failed to read resource {resource_id}: {e}')
            raise ResourceIndexerError(f'Resource read failed for {resource_id}: {e}')

    def update_resource_content(self, resource_id: str, content: str) -> None:
        """Overwrite a resource file's text in place.

        Raises:
            ResourceNotFoundError: If the id does not resolve
            ResourceIndexerError: If the file cannot be written
        """
        resource = self.find_resource(resource_id)
        try:
            Path(resource.path).write_text(content, encoding='utf-8')
        except OSError as e:
            logger.error(f'Failed to update resource {resource_id}: {e}')
            raise ResourceIndexerError(f'Resource update failed for {resource_id}: {e}')
        logger.info(f'Updated resource content: {resource.name}')

    def get_resource_stats(self) -> ResourceStats:
        """Count resources by category, type, protocol and source."""
        try:
            resources = self.scan_resources()
        except Exception as e:
            logger.error(f'Failed to compute resource statistics: {e}')
            return ResourceStats()

        return ResourceStats(total_files=len(resources),
                             total_size=sum(resource.size for resource in resources),
                             by_category=dict(Counter(resource.category for resource in resources)),
                             by_type=dict(Counter(resource.type for resource in resources)),
                             by_protocol=dict(Counter(resource.protocol for resource in resources)),
                             by_source=dict(Counter(resource.source for resource in resources)))

    def _scan_directory(self, directory: Path, folder_path: List[str], resources: List[ResourceRecord]) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.warning(f'Skipping unreadable directory {directory}: {e}')
            return

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    self._scan_directory(Path(entry.path), folder_path + [entry.name], resources)
                elif entry.is_file(follow_symlinks=False):
                    resources.append(self._build_record(Path(entry.path), folder_path))
            except OSError as e:
                logger.warning(f'Skipping unreadable entry {entry.path}: {e}')

    def _build_record(self, path: Path, folder_path: List[str]) -> ResourceRecord:
        stat = path.stat()
        filename = path.name
        protocol = classify_protocol(folder_path, filename)
        created = getattr(stat, 'st_birthtime', stat.st_ctime)

        return ResourceRecord(id=path_id(str(path)),
                              name=filename,
                              path=str(path),
                              size=stat.st_size,
                              type=mime_type_from_extension(extension_of(filename)),
                              protocol=protocol,
                              source=classify_source(folder_path),
                              reference=build_reference(protocol, folder_path, filename),
                              folder_path=list(folder_path),
                              created_at=to_iso(created),
                              updated_at=to_iso(stat.st_mtime),
                              description=extract_description(path, self.config.description_max_length))
