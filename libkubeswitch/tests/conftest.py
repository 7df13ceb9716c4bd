import copy
from pathlib import Path
from typing import Any, Callable, Iterator

import pytest
from yaml import safe_dump

from libkubeswitch.utils import which


@pytest.fixture(autouse=True)
def clear_which_cache() -> Iterator[None]:
    """
    `which` caches lookups for the life of the process, tests that fake
    PATH lookups need a clean slate.
    """
    which.cache_clear()
    yield
    which.cache_clear()


KUBECONFIG = {
    "apiVersion": "v1",
    "kind": "Config",
    "clusters": [{"name": "dev-cluster", "cluster": {"server": "https://dev"}}],
    "users": [{"name": "dev-user", "user": {"token": "abc"}}],
    "contexts": [
        {"name": "dev", "context": {"cluster": "dev-cluster", "user": "dev-user"}},
        {
            "name": "prod",
            "context": {
                "cluster": "prod-cluster",
                "user": "prod-user",
                "namespace": "web",
            },
        },
    ],
    "current-context": "dev",
    "preferences": {},
}


@pytest.fixture
def write_kubeconfig(tmp_path: Path) -> Callable[[Any], Path]:
    def _write(data: Any) -> Path:
        path = tmp_path / "config"
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(safe_dump(data))
        return path

    return _write


@pytest.fixture
def kubeconfig(write_kubeconfig) -> Path:
    return write_kubeconfig(KUBECONFIG)


@pytest.fixture
def kubeconfig_data() -> dict:
    return copy.deepcopy(KUBECONFIG)
