#!/usr/bin/env python3

from __future__ import annotations
from typing import TYPE_CHECKING, Any, NamedTuple

from rich.markup import escape
from rich.tree import Tree

if TYPE_CHECKING:
    from .store import ProfileStore

# ------------------------------------------------------------------------------
# Provenance Explanation
# ------------------------------------------------------------------------------


class FieldStyle(NamedTuple):
    fg_val: str
    bg_val: str
    fg_source: str
    bg_source: str


active_style = FieldStyle("white", "gray39", "white", "gray23")
inactive_style = FieldStyle("gray", "grey23", "dim", "gray15")


def show_provenance_node(
    parent: Tree, name: str, sources: list[tuple[str, Any]], verbose: bool
) -> None:
    if not sources:
        return

    parts = [f"{escape(name)} ="]
    for ix, (current_source, current_value) in enumerate(sources):
        (fg_val, bg_val, fg_source, bg_source) = (
            active_style if ix == 0 else inactive_style
        )
        parts.append(
            f"[{fg_val} on {bg_val}] {escape(str(current_value))} [/]"
            + f"[{fg_source} on {bg_source}] {escape(current_source)} [/]"
        )
        if not verbose:
            break

    parent.add(" ".join(parts))


def explain_store(store: ProfileStore, verbose=False, title: str | None = None) -> Tree:
    """
    Build a tree of every profile in resolution order, showing its parent and where
    each property came from. With `verbose`, overridden values are listed too.
    """
    tree = Tree(title or f"Profiles ({escape(store.label)})")
    for profile in store:
        label = f"[bold]{escape(profile.name)}[/]"
        if profile.parent_name is not None:
            label += f" [dim]inherits from[/] {escape(profile.parent_name)}"
        subtree = tree.add(label)

        history = store.provenance.get(profile.name, {})
        for key, value in profile.properties.items():
            sources = history.get(key) or [(store.label, value)]
            show_provenance_node(subtree, key, sources, verbose)

    return tree
