"""
Health check utilities for the file service.
"""

import os
from typing import Any, Dict, Optional

from .config import AppConfig
from .json_utils import read_json_document
from .logging_config import get_logger

logger = get_logger(__name__)


def check_health(config: Optional[AppConfig] = None) -> bool:
    """Check the health of all storage components.

    Returns:
        True if all components are healthy, False otherwise
    """
    try:
        health_status = get_health_status(config)

        all_healthy = all(status.get('healthy', False) for status in health_status.values())

        if all_healthy:
            logger.info('All storage components are healthy')
        else:
            logger.warning('Some storage components are unhealthy')

        return all_healthy

    except Exception as e:
        logger.error(f'Health check failed: {e}')
        return False


def get_health_status(config: Optional[AppConfig] = None) -> Dict[str, Any]:
    """Get detailed health status of each storage component.

    A missing metadata document or resource root is healthy: both are valid
    empty states.

    Returns:
        Dictionary with health status of each component
    """
    if config is None:
        from .config import config as default_config
        config = default_config

    health_status = {}

    # Attachment blob directory
    storage_dir = config.storage.storage_dir
    if storage_dir.exists():
        writable = storage_dir.is_dir() and os.access(storage_dir, os.W_OK)
        health_status['attachment_storage'] = {'healthy': writable, 'path': str(storage_dir), 'exists': True}
    else:
        health_status['attachment_storage'] = {'healthy': True, 'path': str(storage_dir), 'exists': False}

    # Metadata document
    metadata_path = config.storage.metadata_path
    try:
        document = read_json_document(metadata_path)
        health_status['metadata_store'] = {
            'healthy': True,
            'path': str(metadata_path),
            'records': len(document.get('files', []))
        }
    except FileNotFoundError:
        health_status['metadata_store'] = {'healthy': True, 'path': str(metadata_path), 'records': 0}
    except (OSError, ValueError, AttributeError, TypeError) as e:
        health_status['metadata_store'] = {'healthy': False, 'path': str(metadata_path), 'error': str(e)}

    # Resource root
    resource_root = config.resources.resource_root
    health_status['resource_root'] = {
        'healthy': True,
        'path': str(resource_root),
        'exists': resource_root.is_dir()
    }

    return health_status
