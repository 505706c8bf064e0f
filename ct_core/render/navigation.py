from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

TitleTranslator = Callable[[str, int | None], str]


@dataclass(slots=True, frozen=True)
class MenuEntry:
    id: int
    title: str
    parent_id: int = 0
    order: int = 0
    item_id: int | None = None
    url: str = ""


@dataclass(slots=True)
class MenuNode:
    id: int
    title: str
    order: int
    item_id: int | None
    url: str
    children: list[MenuNode] = field(default_factory=list)


def build_menu_tree(
    entries: Iterable[MenuEntry],
    *,
    translate_title: TitleTranslator | None = None,
) -> list[MenuNode]:
    """Turn a flat menu into a hierarchy ordered by ``order`` at every level.

    Entries whose parent is missing from the menu are dropped, along with
    their descendants.
    """

    ordered = sorted(entries, key=lambda entry: entry.order)
    children_of: dict[int, list[MenuNode]] = {}

    for entry in ordered:
        title = entry.title
        if translate_title is not None:
            title = translate_title(title, entry.item_id)
        node = MenuNode(
            id=entry.id,
            title=title,
            order=entry.order,
            item_id=entry.item_id,
            url=entry.url,
        )
        children_of.setdefault(entry.parent_id, []).append(node)

    def _attach(parent_id: int, seen: set[int]) -> list[MenuNode]:
        branch: list[MenuNode] = []
        for node in children_of.get(parent_id, []):
            if node.id in seen:
                continue
            seen.add(node.id)
            node.children = _attach(node.id, seen)
            branch.append(node)
        return branch

    return _attach(0, set())
