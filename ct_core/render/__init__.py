"""Rendering glue that routes output through the translation engine."""

from ct_core.render.filters import RenderFilters
from ct_core.render.navigation import MenuEntry, MenuNode, build_menu_tree

__all__ = ["MenuEntry", "MenuNode", "RenderFilters", "build_menu_tree"]
