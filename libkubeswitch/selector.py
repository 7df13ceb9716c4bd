from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

import click

from libkubeswitch.utils import KubeSwitchError


class SelectionCancelled(KubeSwitchError):
    pass


class EmptySelectionError(KubeSwitchError):
    pass


class FilterMode(enum.Enum):
    NONE = "none"
    # Plain, case-sensitive `in` match against the option text.
    SUBSTRING = "substring"


@dataclass(frozen=True)
class SelectionList:
    label: str
    items: tuple[str, ...]
    size: int = 10
    filter_mode: FilterMode = FilterMode.NONE
    # Shown with a `*` and used as the answer when the user just hits enter.
    marked: Optional[str] = None

    def visible(self, query: str) -> list[str]:
        if self.filter_mode is FilterMode.SUBSTRING:
            return [item for item in self.items if query in item]
        return list(self.items)


def _render_page(selection: SelectionList, visible: list[str], page: int) -> None:
    start = page * selection.size
    for idx, item in enumerate(visible[start : start + selection.size], start=1):
        marker = " "
        if item == selection.marked:
            marker = click.style("*", fg="green", bold=True)
        click.echo(f"{marker} {start + idx}: {item}")

    pages = -(-len(visible) // selection.size)
    if pages > 1:
        click.echo(f"  [{page + 1}/{pages}]")


def _cursor(selection: SelectionList, visible: list[str]) -> Optional[str]:
    if selection.marked in visible:
        return selection.marked
    return visible[0] if visible else None


def _prompt(text: str) -> str:
    try:
        return click.prompt(text, default="", show_default=False).strip()
    except click.Abort:
        raise SelectionCancelled(f"{text}: selection cancelled") from None


def select(selection: SelectionList) -> str:
    """
    Shows the options of `selection` and blocks until the user picks one.

    An answer can be the option number, the option itself, `n`/`p` to page
    through long lists or nothing at all to take the entry under the cursor.
    In substring mode the full list is shown and a filter is asked for right
    away; afterwards any answer that does not pick an option replaces it.
    """
    if not selection.items:
        raise EmptySelectionError(f"{selection.label}: nothing to choose from")

    substring = selection.filter_mode is FilterMode.SUBSTRING
    query = ""
    if substring:
        _render_page(selection, selection.visible(query), 0)
        query = _prompt(f"{selection.label} (filter)")
    page = 0

    while True:
        visible = selection.visible(query)
        pages = max(1, -(-len(visible) // selection.size))
        page = min(page, pages - 1)

        if visible:
            _render_page(selection, visible, page)
        else:
            click.echo(f"No match for {query!r}")

        answer = _prompt(selection.label)

        choice = None
        if not answer:
            choice = _cursor(selection, visible)
        elif answer in visible:
            choice = answer
        elif answer.isdigit():
            if 1 <= int(answer) <= len(visible):
                choice = visible[int(answer) - 1]
            elif substring:
                query, page = answer, 0
                continue
            else:
                click.echo(f"Error: {answer} is not a valid choice")
                continue
        elif answer == "n" and page + 1 < pages:
            page += 1
            continue
        elif answer == "p" and page > 0:
            page -= 1
            continue
        elif substring:
            query, page = answer, 0
            continue
        else:
            click.echo(f"Error: {answer!r} is not a valid choice")
            continue

        if choice is None:
            continue

        if not substring:
            click.echo(f"{selection.label}: {click.style(choice, bold=True)}")
        return choice
