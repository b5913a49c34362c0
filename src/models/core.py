"""
Core data models for attachment storage and the resource catalog.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

Protocol = Literal['role', 'thought', 'execution', 'tool', 'manual']
Source = Literal['system', 'project', 'user']

RESOURCE_CATEGORY = 'promptx'


@dataclass(frozen=True)
class AttachmentRecord:
    """Metadata row for one stored blob.

    Serialized with the camelCase keys of the on-disk metadata document.
    """
    id: str  # Content-derived, shared by duplicate uploads
    name: str
    size: int
    mime_type: str
    ext: str
    created_at: int  # Milliseconds since epoch

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'size': self.size,
            'mimeType': self.mime_type,
            'ext': self.ext,
            'createdAt': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AttachmentRecord':
        return cls(id=data['id'],
                   name=data['name'],
                   size=int(data['size']),
                   mime_type=data['mimeType'],
                   ext=data['ext'],
                   created_at=int(data['createdAt']))


@dataclass(frozen=True)
class AttachmentData:
    """An attachment record together with the blob file it resolved to."""
    record: AttachmentRecord
    path: Path

    @property
    def id(self) -> str:
        return self.record.id

    def to_dict(self) -> Dict[str, Any]:
        data = self.record.to_dict()
        data['path'] = str(self.path)
        return data


@dataclass(frozen=True)
class ResourceRecord:
    """A classified file discovered under the resource root.

    ``path`` always equals the resource root joined with ``folder_path`` and
    ``name``. Records are rebuilt on every scan and never mutated.
    """
    id: str  # Derived from the path string, so moving a file changes it
    name: str
    path: str
    size: int
    type: str
    protocol: Protocol
    source: Source
    reference: str
    folder_path: List[str]
    created_at: str
    updated_at: str
    description: Optional[str] = None
    category: str = RESOURCE_CATEGORY
    is_leaf: bool = True

    @property
    def parent_folder(self) -> Optional[str]:
        return self.folder_path[-1] if self.folder_path else None

    @property
    def depth(self) -> int:
        return len(self.folder_path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'path': self.path,
            'size': self.size,
            'type': self.type,
            'category': self.category,
            'protocol': self.protocol,
            'source': self.source,
            'reference': self.reference,
            'folderPath': list(self.folder_path),
            'parentFolder': self.parent_folder,
            'depth': self.depth,
            'isLeaf': self.is_leaf,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
            'description': self.description,
        }


@dataclass
class ResourceTreeNode:
    """Presentation node: a folder grouping or a leaf resource."""
    key: str
    title: str
    is_leaf: bool
    type: Literal['folder', 'file']
    children: Optional[List['ResourceTreeNode']] = None
    protocol: Optional[str] = None
    size: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    description: Optional[str] = None
    resource: Optional[ResourceRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'key': self.key,
            'title': self.title,
            'isLeaf': self.is_leaf,
            'type': self.type,
        }
        if self.children is not None:
            data['children'] = [child.to_dict() for child in self.children]
        if self.type == 'file':
            data.update({
                'protocol': self.protocol,
                'size': self.size,
                'createdAt': self.created_at,
                'updatedAt': self.updated_at,
                'description': self.description,
                'fileData': self.resource.to_dict() if self.resource else None,
            })
        return data


@dataclass
class ResourceStats:
    """Aggregate counts over one resource scan."""
    total_files: int = 0
    total_size: int = 0
    by_category: Dict[str, int] = field(default_factory=dict)
    by_type: Dict[str, int] = field(default_factory=dict)
    by_protocol: Dict[str, int] = field(default_factory=dict)
    by_source: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalFiles': self.total_files,
            'totalSize': self.total_size,
            'byCategory': dict(self.by_category),
            'byType': dict(self.by_type),
            'byProtocol': dict(self.by_protocol),
            'bySource': dict(self.by_source),
        }
