import pytest

from kubemani.core.config import IndexSettings
from kubemani.core.engine import DiffIndexManager

DEPLOYMENT_A = (
    "apiVersion: apps/v1\n"
    "kind: Deployment\n"
    "metadata:\n"
    "  name: web\n"
    "spec:\n"
    "  replicas: 2\n"
)

DEPLOYMENT_B = (
    "apiVersion: apps/v1\n"
    "kind: Deployment\n"
    "metadata:\n"
    "  name: web\n"
    "spec:\n"
    "  replicas: 3\n"
)

CONFIGMAP = (
    "apiVersion: v1\n"
    "kind: ConfigMap\n"
    "metadata:\n"
    "  name: cfg\n"
    "data:\n"
    "  key: value\n"
)

SERVICE = (
    "apiVersion: v1\n"
    "kind: Service\n"
    "metadata:\n"
    "  name: web-svc\n"
    "spec:\n"
    "  selector:\n"
    "    app: web\n"
)


def multi_doc(*docs):
    return "---\n".join(docs)


@pytest.fixture
def settings(tmp_path):
    return IndexSettings(temp_base=str(tmp_path / "roots"))


@pytest.fixture
def manager(settings):
    with DiffIndexManager(settings) as m:
        yield m


@pytest.fixture
def write_manifest(tmp_path):
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
