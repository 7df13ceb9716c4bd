from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from shlex import quote
from typing import Optional, Sequence

from libkubeswitch.utils import KUBECTL_BINARY, KubeSwitchError, which

logging.basicConfig(level=os.getenv("KUBE_SWITCH_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


class ExecutableNotFound(KubeSwitchError):
    pass


class CommandExecutionError(KubeSwitchError):
    def __init__(self, args: Sequence[str], returncode: Optional[int], reason: str):
        self.cmd = tuple(args)
        self.returncode = returncode
        super().__init__(f"`{' '.join(map(quote, self.cmd))}' {reason}")


class MalformedOutputLine(KubeSwitchError):
    pass


@dataclass(frozen=True)
class Kubectl:
    """The kubectl executable, resolved once at startup."""

    path: str


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    # Only set in capture mode.
    stdout: Optional[bytes] = None


def ensure_kubectl(binary: str = KUBECTL_BINARY) -> Kubectl:
    path = which(binary)
    if not path:
        raise ExecutableNotFound(
            f"{binary} not found, install it and make sure it is on your PATH"
        )
    return Kubectl(path=path)


def run(kubectl: Kubectl, args: Sequence[str], capture: bool = False) -> CommandResult:
    """
    Runs kubectl with `args` and waits for it to exit.

    By default the child writes straight to our stdout and stderr. With
    `capture` its stdout is collected in memory instead while stderr still
    reaches the terminal.
    """
    cmd = [kubectl.path, *args]
    logger.debug("+ %s", " ".join(map(quote, cmd)))

    try:
        proc = subprocess.run(
            cmd, stdout=subprocess.PIPE if capture else None, check=False
        )
    except OSError as e:
        raise CommandExecutionError(cmd, None, f"could not be started: {e}") from e

    if proc.returncode != 0:
        raise CommandExecutionError(
            cmd, proc.returncode, f"exited with status {proc.returncode}"
        )

    return CommandResult(
        args=tuple(cmd),
        returncode=proc.returncode,
        stdout=proc.stdout if capture else None,
    )


def use_context(kubectl: Kubectl, name: str) -> None:
    run(kubectl, ["config", "use-context", name])


def set_namespace(kubectl: Kubectl, namespace: str) -> None:
    run(kubectl, ["config", "set-context", "--current", f"--namespace={namespace}"])


def get_namespaces(kubectl: Kubectl, context: str) -> list[str]:
    # This talks to the cluster and can take a while on a busy or far away one.
    result = run(kubectl, ["get", "namespace", "--context", context], capture=True)
    return parse_namespaces((result.stdout or b"").decode("utf-8", errors="replace"))


def _parse_namespace_line(line: str) -> str:
    fields = line.split()
    if not fields:
        raise MalformedOutputLine(f"no fields in line {line!r}")
    return fields[0]


def parse_namespaces(output: str) -> list[str]:
    """
    Extracts namespace names from the table printed by `kubectl get namespace`:

        NAME              STATUS   AGE
        default           Active   14d
        kube-system       Active   14d

    The header is dropped and the first column of every other line is kept, in
    the order kubectl printed them. Lines without any field are skipped.
    """
    namespaces = []
    for line in output.splitlines()[1:]:
        try:
            namespaces.append(_parse_namespace_line(line))
        except MalformedOutputLine as e:
            logger.warning("Skipping namespace output line: %s", e)
    return namespaces
