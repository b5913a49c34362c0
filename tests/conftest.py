"""Shared fixtures: isolated configuration and resource trees under tmp_path."""

from pathlib import Path

import pytest

from src.services.attachment_store import AttachmentStore
from src.services.file_service import FileService
from src.services.resource_indexer import ResourceIndexer
from src.utils.config import AppConfig, ResourceConfig, StorageConfig
from src.utils.metadata_store import MetadataStore

NOW_MS = 1_760_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = NOW_MS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1) -> None:
        self.now += ms


def write_file(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    data_dir = tmp_path / "data"
    return AppConfig(
        environment="test",
        log_level="DEBUG",
        log_file=None,
        data_dir=data_dir,
        storage=StorageConfig(
            storage_dir=data_dir / "attachments",
            metadata_path=data_dir / "file-metadata.json",
            max_age_days=30,
            deduplicate=False,
        ),
        resources=ResourceConfig(resource_root=data_dir / "resource", description_max_length=100),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def metadata_store(app_config) -> MetadataStore:
    store = MetadataStore(app_config.storage.metadata_path)
    store.initialize()
    return store


@pytest.fixture
def attachment_store(app_config, metadata_store, clock) -> AttachmentStore:
    store = AttachmentStore(app_config.storage, metadata=metadata_store, clock=clock)
    store.initialize()
    return store


@pytest.fixture
def resource_root(app_config) -> Path:
    """A small resource tree covering every classification branch."""
    root = app_config.resources.resource_root
    write_file(root / "role" / "architect" / "architect.role.md", "# Architect\n\nDesigns systems.\n")
    write_file(root / "role" / "architect" / "execution" / "plan.md", "Plan the work.\n")
    write_file(root / "role" / "architect" / "thought" / "reflect.md", "## Reflect\nThink twice.\n")
    write_file(root / "role" / "writer" / "notes.md", "Writer notes\n")
    write_file(root / "tool" / "web-search" / "manual.md", "How to search.\n")
    write_file(root / "tool" / "web-search" / "web-search.tool.js", "module.exports = {}\n")
    write_file(root / "system" / "core.execution.md", "Core execution.\n")
    return root


@pytest.fixture
def indexer(app_config) -> ResourceIndexer:
    return ResourceIndexer(app_config.resources)


@pytest.fixture
def file_service(app_config, attachment_store, indexer) -> FileService:
    service = FileService(app_config, attachments=attachment_store, indexer=indexer)
    service.initialize()
    return service
