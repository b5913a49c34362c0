"""
Fold flat resource lists into trees for presentation.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from ..models.core import ResourceRecord, ResourceTreeNode
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

FOLDER_DISPLAY_NAMES = {
    'role': '角色 (Roles)',
    'tool': '工具 (Tools)',
    'thought': '思维 (Thoughts)',
    'execution': '执行 (Executions)',
    'knowledge': '知识 (Knowledge)',
}


def folder_display_name(folder: str, display_names: Mapping[str, str] = FOLDER_DISPLAY_NAMES) -> str:
    return display_names.get(folder, folder)


def _folder_node(key: str, title: str) -> ResourceTreeNode:
    return ResourceTreeNode(key=key, title=title, is_leaf=False, type='folder', children=[])


def _leaf_node(resource: ResourceRecord) -> ResourceTreeNode:
    return ResourceTreeNode(key=f'file_{resource.id}',
                            title=resource.name,
                            is_leaf=True,
                            type='file',
                            protocol=resource.protocol,
                            size=resource.size,
                            created_at=resource.created_at,
                            updated_at=resource.updated_at,
                            description=resource.description,
                            resource=resource)


def build_resource_tree(resources: Sequence[ResourceRecord],
                        display_names: Mapping[str, str] = FOLDER_DISPLAY_NAMES) -> List[ResourceTreeNode]:
    """Group resources under one folder node per first ``folder_path`` segment.

    Every resource becomes a direct child of its top-level folder regardless of
    deeper nesting. Folder order follows first appearance in ``resources``;
    resources at the root itself have no folder and are left out.
    """
    tree: List[ResourceTreeNode] = []
    folders: Dict[str, ResourceTreeNode] = {}

    for resource in resources:
        if not resource.folder_path:
            continue
        top = resource.folder_path[0]
        node = folders.get(top)
        if node is None:
            node = _folder_node(top, folder_display_name(top, display_names))
            folders[top] = node
            tree.append(node)
        node.children.append(_leaf_node(resource))

    logger.debug(f'Built resource tree with {len(tree)} root folders')
    return tree


def build_nested_resource_tree(resources: Sequence[ResourceRecord],
                               display_names: Mapping[str, str] = FOLDER_DISPLAY_NAMES) -> List[ResourceTreeNode]:
    """Mirror the full folder hierarchy: one folder node per distinct path prefix.

    Folder keys are the '/'-joined prefix; a folder's parent is the prefix with
    its last segment dropped. Root-level resources appear at the top level.
    """
    roots: List[ResourceTreeNode] = []
    folders: Dict[str, ResourceTreeNode] = {}

    def folder_for(prefix: Sequence[str]) -> Optional[ResourceTreeNode]:
        if not prefix:
            return None
        key = '/'.join(prefix)
        node = folders.get(key)
        if node is None:
            title = folder_display_name(prefix[0], display_names) if len(prefix) == 1 else prefix[-1]
            node = _folder_node(key, title)
            folders[key] = node
            parent = folder_for(prefix[:-1])
            (parent.children if parent is not None else roots).append(node)
        return node

    for resource in resources:
        parent = folder_for(resource.folder_path)
        (parent.children if parent is not None else roots).append(_leaf_node(resource))

    return roots
