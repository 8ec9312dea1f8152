# What it does: Flattens a tree object into the list of file paths it contains, like `ls-tree -r --name-only`
# How it does: Depth-first walk over the Merkle Tree with an explicit stack of entry iterators instead of recursion, so deep directory nesting cannot exhaust the call stack.
# Entries come out in the order they are stored in the tree object, never re-sorted
# What data structure it uses: Stack (of (entry iterator, path prefix) pairs) for a depth-first traversal of a Merkle Tree

import logging

from . import objects

logger = logging.getLogger(__name__)


def _warn_not_a_tree(object_id, obj):
    logger.warning("skipping %s: expected a tree, found a %s", object_id, obj.type)


def _tree_entries(git_dir, tree_id, on_other):
    obj = objects.read_object(git_dir, tree_id)
    match obj:
        case objects.Tree(entries=entries):
            return entries
        case _:
            on_other(tree_id, obj)
            return ()


def flatten_tree(git_dir, tree_id, on_other=_warn_not_a_tree):
    """
    Yields the path of every non-directory entry reachable from `tree_id`.
    Directory entries (mode 40000) are descended into, their names becoming
    `/`-separated path prefixes.

    A blob or commit found where a tree was expected contributes no paths.
    It is handed to `on_other(object_id, obj)` at the point it is reached,
    which by default logs a warning.
    """
    stack = [(iter(_tree_entries(git_dir, tree_id, on_other)), '')]

    while stack:
        entries, prefix = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue

        if not entry.is_dir:
            yield prefix + entry.name
        else:
            stack.append((iter(_tree_entries(git_dir, entry.id, on_other)), f"{prefix}{entry.name}/"))
