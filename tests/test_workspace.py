import pytest

from kubemani.core.errors import MaterializationError, StorageError
from kubemani.storage.workspace import TempWorkspace


def test_create_root(tmp_path):
    workspace = TempWorkspace(prefix="kubemani-test-", base_dir=tmp_path)
    root = workspace.create_root()

    assert workspace.is_directory(root)
    assert root.parent == tmp_path
    assert root.name.startswith("kubemani-test-")
    assert workspace.create_root() != root


def test_delete_root(tmp_path):
    workspace = TempWorkspace(base_dir=tmp_path)
    root = workspace.create_root()
    workspace.create_sub_path(root, "apps/Deployment/web")

    assert workspace.delete_root(root) is True
    assert not root.exists()
    # Already gone: no-op
    assert workspace.delete_root(root) is False
    assert workspace.delete_root(None) is False


def test_create_sub_path_is_idempotent(tmp_path):
    workspace = TempWorkspace(base_dir=tmp_path)
    root = workspace.create_root()

    first = workspace.create_sub_path(root, "core/ConfigMap/cfg")
    second = workspace.create_sub_path(root, "core/ConfigMap/cfg")

    assert first == second == root / "core" / "ConfigMap" / "cfg"
    assert workspace.is_directory(first)


def test_is_file(tmp_path):
    target = tmp_path / "tempFileTest.txt"
    target.write_text("test", encoding="utf-8")

    assert TempWorkspace.is_file(target) is True
    assert TempWorkspace.is_file(tmp_path) is False
    assert TempWorkspace.is_file(None) is False


def test_write_text_leaves_no_temp_files(tmp_path):
    workspace = TempWorkspace(base_dir=tmp_path)
    target = workspace.create_sub_path(workspace.create_root(), "core/Pod/p") / "Left.txt"
    workspace.write_text(target, "one\n")
    workspace.write_text(target, "two\n")

    assert target.read_text(encoding="utf-8") == "two\n"
    assert [p.name for p in target.parent.iterdir()] == ["Left.txt"]


def test_base_dirname(tmp_path):
    workspace = TempWorkspace(base_dir=tmp_path)
    sub = workspace.create_sub_path(workspace.create_root(), "subdirectory")
    target = sub / "tempFileTest.txt"
    target.write_text("test", encoding="utf-8")

    assert workspace.base_dirname(sub) == "subdirectory"
    assert workspace.base_dirname(target) == "subdirectory"


def test_create_sub_path_wraps_unusable_names(tmp_path):
    workspace = TempWorkspace(base_dir=tmp_path)
    root = workspace.create_root()

    with pytest.raises(MaterializationError):
        workspace.create_sub_path(root, "core/Pod/a\x00b")


def test_write_text_wraps_unusable_names(tmp_path):
    workspace = TempWorkspace(base_dir=tmp_path)

    with pytest.raises(MaterializationError):
        workspace.write_text(tmp_path / "a\x00b.txt", "data: 1\n")
    assert list(tmp_path.iterdir()) == []


def test_create_root_under_unusable_base(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    workspace = TempWorkspace(base_dir=blocker / "sub")

    with pytest.raises(StorageError):
        workspace.create_root()
