from __future__ import annotations

"""
Tree Renderer.

Converts a virtual directory view into an ASCII tree. Children are grouped
by the real sub-folders they live in so the user can see where each
referenced note actually sits on disk.
"""

import os
from typing import Dict, List, Union

from notefolders.domain.virtual_dir_models import FileObject, VirtualDirectoryView

Tree = Dict[str, Union["Tree", FileObject]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_virtual_dir(view: VirtualDirectoryView) -> List[str]:
    """
    Render a view as lines, headed by its name.

    Args:
        view: The virtual directory to render.

    Returns:
        List[str]: Visual lines, first line is '<name>/'.
    """
    lines: List[str] = [f"{view.name}/"]
    render_tree_structure(build_tree(view.children), lines)
    return lines


def build_tree(files: List[FileObject]) -> Tree:
    """
    Nest file objects by the directory components of their relative path.
    """
    tree: Tree = {}
    for f in files:
        parts = f.rel_path.split(os.sep)
        level = tree
        for part in parts[:-1]:
            nxt = level.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                level[part] = nxt
            level = nxt
        level[parts[-1]] = f
    return tree


def render_tree_structure(tree_structure: Tree, lines: List[str], prefix: str = "") -> None:
    """
    Recursively transform the Tree model into a list of strings.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested directories.

    Args:
        tree_structure: Current Tree node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries = sorted(tree_structure.keys())
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        node = tree_structure[entry]

        if isinstance(node, dict):
            lines.append(f"{prefix}{connector}{entry}/")
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(node, lines, prefix=new_prefix)
            continue

        lines.append(f"{prefix}{connector}{entry}")
