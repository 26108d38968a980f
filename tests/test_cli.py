import pytest

from kubemani.cli.main import KubeManiCLI

from conftest import CONFIGMAP, DEPLOYMENT_A, DEPLOYMENT_B, SERVICE, multi_doc


@pytest.fixture
def files(write_manifest):
    file_a = write_manifest("a.yaml", multi_doc(DEPLOYMENT_A, CONFIGMAP))
    file_b = write_manifest("b.yaml", multi_doc(DEPLOYMENT_B, SERVICE))
    return str(file_a), str(file_b)


def test_no_arguments_prints_help(capsys):
    assert KubeManiCLI().run([]) == 0
    assert "kubemani" in capsys.readouterr().out


def test_tree_lists_every_manifest(files, capsys):
    assert KubeManiCLI().run(["tree", *files]) == 0
    out = capsys.readouterr().out

    for label in ("apps", "Deployment", "web", "core", "ConfigMap", "cfg", "Service", "web-svc"):
        assert label in out
    assert "changed" in out
    assert "Summary Report" in out
    assert "File A:" in out and "File B:" in out


def test_tree_status_filter(files, capsys):
    assert KubeManiCLI().run(["tree", *files, "--status", "right"]) == 0
    tree_part = capsys.readouterr().out.split("Summary Report")[0]

    assert "web-svc" in tree_part
    assert "cfg" not in tree_part


def test_diff_shows_changed_lines(files, capsys):
    assert KubeManiCLI().run(["diff", *files]) == 0
    out = capsys.readouterr().out

    assert "replicas: 2" in out
    assert "replicas: 3" in out
    assert "KubeMani Diff - apps/Deployment/web" in out


def test_diff_single_path(files, capsys):
    assert KubeManiCLI().run(["diff", *files, "--path", "core/Service/web-svc"]) == 0
    assert "web-svc" in capsys.readouterr().out


def test_diff_unknown_path(files, capsys):
    assert KubeManiCLI().run(["diff", *files, "--path", "core/Secret/nope"]) == 1
    assert "No manifest" in capsys.readouterr().out


def test_compare_single_sided_manifests(files, capsys):
    code = KubeManiCLI().run(["compare", *files, "core/ConfigMap/cfg", "core/Service/web-svc"])
    assert code == 0
    assert "KubeMani Diff - cfg - web-svc" in capsys.readouterr().out


def test_compare_rejects_shared_manifest(files, capsys):
    code = KubeManiCLI().run(["compare", *files, "apps/Deployment/web", "core/ConfigMap/cfg"])
    assert code == 1
    assert "Cannot compare selected items" in capsys.readouterr().out


def test_unparseable_file_fails(write_manifest, capsys):
    good = write_manifest("a.yaml", CONFIGMAP)
    bad = write_manifest("b.yaml", "metadata: {name: [oops\n")

    assert KubeManiCLI().run(["tree", str(good), str(bad)]) == 1
    assert "Index build failed" in capsys.readouterr().out


def test_missing_file(write_manifest, tmp_path, capsys):
    good = write_manifest("a.yaml", CONFIGMAP)
    assert KubeManiCLI().run(["tree", str(good), str(tmp_path / "missing.yaml")]) == 1
    assert "File B not found" in capsys.readouterr().out
