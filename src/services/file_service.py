"""
File Service: unified entry point for attachments and the resource catalog.
"""

from typing import Any, Dict, List, Optional

from ..models.core import AttachmentData, ResourceRecord, ResourceStats, ResourceTreeNode
from ..utils.config import AppConfig, config as default_config
from ..utils.health_check import get_health_status
from ..utils.logging_config import get_logger
from .attachment_store import AttachmentStore
from .resource_indexer import ResourceIndexer
from .resource_tree import build_nested_resource_tree, build_resource_tree

logger = get_logger(__name__)


class FileService:
    """Operations consumed by the presentation layer.

    Attachment calls go through the AttachmentStore; resource calls re-scan the
    resource root every time, so ids are always resolved against the current
    filesystem state.
    """

    def __init__(self, app_config: Optional[AppConfig] = None,
                 attachments: Optional[AttachmentStore] = None,
                 indexer: Optional[ResourceIndexer] = None):
        """Initialize the file service."""
        self.config = app_config or default_config
        self.attachments = attachments or AttachmentStore(self.config.storage)
        self.indexer = indexer or ResourceIndexer(self.config.resources)
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def initialize(self) -> None:
        """Prepare storage. Safe to call more than once."""
        logger.info('Initializing FileService')
        self.attachments.initialize()
        self._ready = True
        logger.info('FileService initialized')

    def shutdown(self) -> None:
        logger.info('Shutting down FileService')
        self._ready = False

    # Attachments

    def save_attachment(self, content: bytes, name: str, mime_type: str) -> str:
        return self.attachments.save_attachment(content, name=name, mime_type=mime_type)

    def get_attachment(self, attachment_id: str) -> Optional[AttachmentData]:
        return self.attachments.get_attachment(attachment_id)

    def get_attachment_content(self, attachment_id: str) -> str:
        return self.attachments.get_attachment_content(attachment_id)

    def delete_attachment(self, attachment_id: str) -> bool:
        return self.attachments.delete_attachment(attachment_id)

    def cleanup_old_files(self, max_age_ms: Optional[int] = None) -> int:
        return self.attachments.cleanup_old_files(max_age_ms)

    # Resources

    def scan_resources(self, category: Optional[str] = None) -> List[ResourceRecord]:
        return self.indexer.scan_resources(category)

    def build_resource_tree(self, category: Optional[str] = None, nested: bool = False) -> List[ResourceTreeNode]:
        """Scan and fold resources into a tree.

        Args:
            category: Optional category filter
            nested: Mirror every folder level instead of grouping by top-level folder
        """
        logger.info(f"Building resource tree, category: {category or 'all'}")
        resources = self.indexer.scan_resources(category)
        if nested:
            return build_nested_resource_tree(resources)
        return build_resource_tree(resources)

    def get_resource_stats(self) -> ResourceStats:
        return self.indexer.get_resource_stats()

    def read_resource_content(self, resource_id: str) -> str:
        return self.indexer.read_resource_content(resource_id)

    def update_resource_content(self, resource_id: str, content: str) -> None:
        self.indexer.update_resource_content(resource_id, content)

    def get_health_status(self) -> Dict[str, Any]:
        return get_health_status(self.config)
