from __future__ import annotations

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Sequence, Union

from yaml import SafeLoader, YAMLError, load

from libkubeswitch.utils import KubeSwitchError


class ConfigReadError(KubeSwitchError):
    pass


class ConfigParseError(KubeSwitchError):
    pass


@dataclass(frozen=True)
class KubeContext:
    """
    One entry of the kubeconfig `contexts` list. The settings (cluster, user,
    namespace, ...) are kept as an opaque read-only mapping.
    """

    name: str
    settings: Mapping[str, Any]

    @classmethod
    def from_conf(cls, conf: Any) -> KubeContext:
        if not isinstance(conf, Mapping):
            raise ConfigParseError(f"context entry is not a mapping: {conf!r}")

        name = conf.get("name")
        if not isinstance(name, str):
            raise ConfigParseError(f"context entry has no valid name: {conf!r}")

        settings = conf.get("context")
        if settings is None:
            settings = {}
        if not isinstance(settings, Mapping):
            raise ConfigParseError(f"settings of context `{name}' are not a mapping")

        return KubeContext(name=name, settings=MappingProxyType(dict(settings)))


@dataclass(frozen=True)
class ClientConfig:
    """
    The two pieces of the Kubernetes client configuration we care about:
    the contexts (in file order) and the name of the current one.
    """

    contexts: tuple[KubeContext, ...]
    current_context: str

    @property
    def context_names(self) -> list[str]:
        return [context.name for context in self.contexts]

    @classmethod
    def from_conf(cls, conf: Any) -> ClientConfig:
        if not isinstance(conf, Mapping):
            raise ConfigParseError("configuration is not a mapping")

        contexts = conf.get("contexts")
        if contexts is None:
            contexts = []
        # A bare string is a Sequence too, but never a valid contexts list.
        if not isinstance(contexts, Sequence) or isinstance(contexts, str):
            raise ConfigParseError("`contexts' is not a list")

        current_context = conf.get("current-context")
        if current_context is None:
            current_context = ""
        if not isinstance(current_context, str):
            raise ConfigParseError("`current-context' is not a string")

        return ClientConfig(
            contexts=tuple(KubeContext.from_conf(c) for c in contexts),
            current_context=current_context,
        )


def load_client_config(path: Union[str, os.PathLike]) -> ClientConfig:
    """
    Reads and parses the kubeconfig at `path`.

    The file is read completely and closed before parsing. Any problem opening
    it raises ConfigReadError; any problem with its content raises
    ConfigParseError, so callers never see a half-populated config.
    """
    try:
        with open(path, encoding="utf-8") as file:
            content = file.read()
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigReadError(f"Could not read {path}: {e}") from e

    try:
        configuration = load(content, Loader=SafeLoader)
    except YAMLError as e:
        raise ConfigParseError(f"{path} is not valid YAML: {e}") from e

    if configuration is None:
        raise ConfigParseError(f"{path} is empty")

    try:
        return ClientConfig.from_conf(configuration)
    except ConfigParseError as e:
        raise ConfigParseError(f"{path}: {e}") from e
