import pytest

from kubemani.core.errors import MaterializationError
from kubemani.core.models import ManifestIdentity, Side
from kubemani.indexing.materializer import ContentMaterializer
from kubemani.storage.workspace import TempWorkspace


@pytest.fixture
def workspace(tmp_path):
    return TempWorkspace(base_dir=tmp_path)


def test_materialize_writes_side_file(workspace):
    root = workspace.create_root()
    identity = ManifestIdentity("apps", "Deployment", "web")
    doc = ContentMaterializer(workspace).materialize(identity, "kind: Deployment\n", Side.LEFT, root)

    assert doc.locator == root / "apps" / "Deployment" / "web" / "Left.txt"
    assert doc.locator.read_text(encoding="utf-8") == "kind: Deployment\n"
    assert doc.canonical_text == "kind: Deployment\n"
    assert doc.side is Side.LEFT
    assert doc.identity == identity


def test_both_sides_share_the_leaf_directory(workspace):
    root = workspace.create_root()
    identity = ManifestIdentity("core", "ConfigMap", "cfg")
    materializer = ContentMaterializer(workspace)

    left = materializer.materialize(identity, "a\n", Side.LEFT, root)
    right = materializer.materialize(identity, "b\n", Side.RIGHT, root)
    again = materializer.materialize(identity, "c\n", Side.LEFT, root)

    assert left.locator.parent == right.locator.parent
    assert sorted(p.name for p in left.locator.parent.iterdir()) == ["Left.txt", "Right.txt"]
    assert again.locator.read_text(encoding="utf-8") == "c\n"


def test_custom_suffix(workspace):
    root = workspace.create_root()
    doc = ContentMaterializer(workspace, suffix=".yaml").materialize(
        ManifestIdentity("core", "Service", "svc"), "x\n", Side.RIGHT, root
    )
    assert doc.locator.name == "Right.yaml"


def test_write_failure_is_fatal(workspace):
    root = workspace.create_root()
    # A regular file where the group directory should go
    (root / "apps").write_text("in the way", encoding="utf-8")

    with pytest.raises(MaterializationError):
        ContentMaterializer(workspace).materialize(
            ManifestIdentity("apps", "Deployment", "web"), "x\n", Side.LEFT, root
        )


def test_missing_root_is_rejected(workspace):
    with pytest.raises(MaterializationError):
        ContentMaterializer(workspace).materialize(
            ManifestIdentity("apps", "Deployment", "web"), "x\n", Side.LEFT, None
        )
