from pathlib import Path
from typing import Iterator
from unittest.mock import MagicMock, patch

import pytest
from yaml import safe_dump

from libkubeswitch.utils import which

KUBECTL = "/usr/local/bin/kubectl"

KUBECONFIG = {
    "apiVersion": "v1",
    "kind": "Config",
    "contexts": [
        {"name": "dev", "context": {"cluster": "dev", "user": "dev"}},
        {"name": "prod", "context": {"cluster": "prod", "user": "prod"}},
    ],
    "current-context": "dev",
}


@pytest.fixture(autouse=True)
def mock_which() -> Iterator[MagicMock]:
    which.cache_clear()
    with patch("libkubeswitch.utils.shutil.which", return_value=KUBECTL) as mock:
        yield mock
    which.cache_clear()


@pytest.fixture
def mock_run() -> Iterator[MagicMock]:
    with patch("libkubeswitch.kubectl.subprocess.run") as mock:
        mock.return_value = MagicMock(returncode=0, stdout=None)
        yield mock


@pytest.fixture
def kubeconfig(tmp_path: Path) -> Path:
    path = tmp_path / ".kube" / "config"
    path.parent.mkdir()
    path.write_text(safe_dump(KUBECONFIG))
    return path
