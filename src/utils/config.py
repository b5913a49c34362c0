"""
Configuration management for attachment storage and resource indexing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass
class StorageConfig:
    """Configuration for the content-addressed attachment store."""
    storage_dir: Path
    metadata_path: Path
    max_age_days: int
    deduplicate: bool


@dataclass
class ResourceConfig:
    """Configuration for the resource indexer."""
    resource_root: Path
    description_max_length: int


@dataclass
class AppConfig:
    """Main application configuration."""
    environment: str
    log_level: str
    log_file: Optional[Path]
    data_dir: Path
    storage: StorageConfig
    resources: ResourceConfig


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def load_config() -> AppConfig:
    """Load configuration from environment variables with defaults."""
    environment = os.getenv('ENVIRONMENT', 'development')
    data_dir = Path(os.getenv('FILE_SERVICE_DATA_DIR', str(Path.home() / '.deechat'))).expanduser()

    # Attachment storage configuration
    storage_config = StorageConfig(storage_dir=Path(os.getenv('ATTACHMENT_STORAGE_DIR',
                                                              str(data_dir / 'attachments'))).expanduser(),
                                   metadata_path=Path(os.getenv('ATTACHMENT_METADATA_PATH',
                                                                str(data_dir / 'file-metadata.json'))).expanduser(),
                                   max_age_days=int(os.getenv('ATTACHMENT_MAX_AGE_DAYS', '30')),
                                   deduplicate=_env_flag('ATTACHMENT_DEDUPLICATE'))

    # Resource indexer configuration
    default_root = data_dir / 'promptx-workspace' / '.promptx' / 'resource'
    resource_config = ResourceConfig(resource_root=Path(os.getenv('PROMPTX_RESOURCE_ROOT',
                                                                  str(default_root))).expanduser(),
                                     description_max_length=int(os.getenv('RESOURCE_DESCRIPTION_MAX_LENGTH', '100')))

    log_file = os.getenv('LOG_FILE')

    return AppConfig(environment=environment,
                     log_level=os.getenv('LOG_LEVEL', 'INFO'),
                     log_file=Path(log_file).expanduser() if log_file else None,
                     data_dir=data_dir,
                     storage=storage_config,
                     resources=resource_config)


# Global configuration instance
config = load_config()
