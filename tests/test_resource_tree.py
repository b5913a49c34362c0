"""Tests for folding resources into presentation trees."""

from typing import List

from src.models.core import ResourceRecord
from src.services.resource_tree import build_nested_resource_tree, build_resource_tree


def make_resource(folder_path: List[str], name: str, protocol: str = "role") -> ResourceRecord:
    path = "/res/" + "/".join(folder_path + [name])
    return ResourceRecord(id=f"id-{path}", name=name, path=path, size=10, type="text/markdown",
                          protocol=protocol, source="project", reference="@role://x//y",
                          folder_path=folder_path, created_at="2025-01-01T00:00:00+00:00",
                          updated_at="2025-01-02T00:00:00+00:00", description="desc")


class TestBuildResourceTree:
    """Two-level grouping by first folder segment."""

    def test_groups_into_single_folder(self):
        resources = [
            make_resource(["role", "architect", "execution"], "plan.md", "execution"),
            make_resource(["role", "writer"], "notes.md"),
        ]

        tree = build_resource_tree(resources)

        assert len(tree) == 1
        folder = tree[0]
        assert folder.key == "role"
        assert folder.title == "角色 (Roles)"
        assert folder.type == "folder"
        assert not folder.is_leaf
        assert [child.title for child in folder.children] == ["plan.md", "notes.md"]

    def test_leaf_carries_resource_details(self):
        resource = make_resource(["tool", "web"], "manual.md", "manual")

        leaf = build_resource_tree([resource])[0].children[0]

        assert leaf.key == f"file_{resource.id}"
        assert leaf.is_leaf and leaf.type == "file"
        assert leaf.protocol == "manual"
        assert leaf.size == 10
        assert leaf.description == "desc"
        assert leaf.resource is resource
        assert leaf.children is None

    def test_unknown_folder_uses_raw_name(self):
        tree = build_resource_tree([make_resource(["custom"], "a.md")])
        assert tree[0].title == "custom"

    def test_folders_only_for_present_segments(self):
        tree = build_resource_tree([make_resource(["tool", "x"], "a.md"), make_resource(["role", "y"], "b.md")])
        assert [node.key for node in tree] == ["tool", "role"]

    def test_root_level_resources_are_skipped(self):
        assert build_resource_tree([make_resource([], "loose.md")]) == []

    def test_empty_input(self):
        assert build_resource_tree([]) == []

    def test_to_dict_shape(self):
        data = build_resource_tree([make_resource(["role", "a"], "a.md")])[0].to_dict()

        assert data["isLeaf"] is False
        child = data["children"][0]
        assert child["type"] == "file"
        assert child["fileData"]["folderPath"] == ["role", "a"]


class TestBuildNestedResourceTree:
    """One folder node per distinct path prefix."""

    def test_mirrors_hierarchy(self):
        resources = [
            make_resource(["role", "architect", "execution"], "plan.md"),
            make_resource(["role", "architect"], "architect.role.md"),
            make_resource(["role", "writer"], "notes.md"),
            make_resource([], "loose.md"),
        ]

        tree = build_nested_resource_tree(resources)

        assert [node.key for node in tree] == ["role", f"file_{resources[3].id}"]
        role = tree[0]
        assert role.title == "角色 (Roles)"
        assert [child.key for child in role.children] == ["role/architect", "role/writer"]
        architect = role.children[0]
        assert architect.title == "architect"
        assert [child.key for child in architect.children] == [
            "role/architect/execution",
            f"file_{resources[1].id}",
        ]
        assert architect.children[0].children[0].title == "plan.md"
