import os
import shutil
from functools import cache
from pathlib import Path
from typing import Optional

import click

# Name of the kubectl executable looked up on PATH. Point it at a wrapper
# (or a differently named binary) with KUBE_SWITCH_KUBECTL_BINARY.
KUBECTL_BINARY = os.environ.get("KUBE_SWITCH_KUBECTL_BINARY", "kubectl")


class KubeSwitchError(Exception):
    """
    Base class for every error kube-switch reports to the user.

    Library code raises these; only the CLI turns them into an exit.
    """


def die(msg: str = "") -> None:
    click.echo(msg, err=True)
    raise click.Abort()


@cache
def which(cmd: str) -> Optional[str]:
    return shutil.which(cmd)


def default_kubeconfig_path() -> Path:
    return Path.home() / ".kube" / "config"
