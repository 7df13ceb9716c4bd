import os

import click
from libkubeswitch.config import load_client_config
from libkubeswitch.kubectl import ensure_kubectl
from libkubeswitch.kubectl import get_namespaces
from libkubeswitch.kubectl import set_namespace
from libkubeswitch.kubectl import use_context
from libkubeswitch.selector import FilterMode
from libkubeswitch.selector import SelectionList
from libkubeswitch.selector import select
from libkubeswitch.utils import KubeSwitchError
from libkubeswitch.utils import default_kubeconfig_path
from libkubeswitch.utils import die


FORCE_COLOR = {
    **dict.fromkeys(("1", "true", "yes", "on"), True),
    **dict.fromkeys(("0", "false", "no", "off"), False),
}


def _configure_colors(ctx: click.Context) -> None:
    """FORCE_COLOR turns the marker and highlight styling on or off."""
    ctx.color = FORCE_COLOR.get(os.environ.get("FORCE_COLOR", "").lower(), ctx.color)


def switch(kubeconfig, filter_mode, quiet):
    kubectl = ensure_kubectl()
    config = load_client_config(kubeconfig)

    if not quiet:
        click.echo(f"Kube context: {config.current_context or '(none)'}")

    context = select(
        SelectionList(
            label="Select context",
            items=tuple(config.context_names),
            size=10,
            filter_mode=filter_mode,
            marked=config.current_context or None,
        )
    )
    use_context(kubectl, context)

    answer = select(
        SelectionList(
            label="Set namespace for current context?",
            items=("no", "yes"),
            size=2,
        )
    )
    if answer != "yes":
        return

    namespaces = get_namespaces(kubectl, context)
    namespace = select(
        SelectionList(
            label="Select namespace",
            items=tuple(namespaces),
            size=10,
            filter_mode=filter_mode,
        )
    )
    set_namespace(kubectl, namespace)


@click.command()
@click.option(
    "--kubeconfig",
    type=click.Path(dir_okay=False),
    help="Kubernetes client configuration to read contexts from.",
    envvar="KUBE_SWITCH_KUBECONFIG",
    default=lambda: str(default_kubeconfig_path()),
    show_default="~/.kube/config",
)
@click.option(
    "-f",
    "--filter",
    "filter_",
    is_flag=True,
    help="Narrow the context and namespace lists by typing part of a name.",
    envvar="KUBE_SWITCH_FILTER",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Do not output informational messages",
    envvar="KUBE_SWITCH_QUIET",
)
@click.pass_context
def main(ctx, *, kubeconfig, filter_, quiet):
    """
    Pick a kubectl context and, optionally, a namespace for it.
    """
    _configure_colors(ctx)

    try:
        switch(
            kubeconfig,
            filter_mode=FilterMode.SUBSTRING if filter_ else FilterMode.NONE,
            quiet=quiet,
        )
    except KubeSwitchError as e:
        die(str(e))
