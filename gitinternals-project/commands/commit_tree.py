# The command: gitinternals commit-tree <commit-hash>
# What it does: Lists every file path recorded in a commit's snapshot
# How it does: Reads the commit to find its root tree, then flattens that tree depth-first, printing one path per line in stored order.
# If a tree entry points at something that is not a tree, that object's content is shown in place, the way cat-file would show it
# What data structure it uses: Merkle Tree, walked depth-first with an explicit stack (see utils/tree_walk.py)

import sys
from utils import config, objects, tree_walk
from utils.errors import GitInternalsError
from commands.cat_file import format_object


def show_object(object_id, obj): # Prints a non-tree found where a tree was expected
    print("\n".join(format_object(obj)))


def run(args):
    git_dir = config.require_git_dir(args.git_dir)

    if not objects.is_object_id(args.commit):
        print(f"fatal: Not a valid object name {args.commit}", file=sys.stderr)
        sys.exit(1)

    try:
        commit = objects.read_object(git_dir, args.commit)
        if not isinstance(commit, objects.Commit):
            print(f"fatal: wrong type: {args.commit} is a {commit.type}, not a commit", file=sys.stderr)
            sys.exit(1)

        for path in tree_walk.flatten_tree(git_dir, commit.tree, on_other=show_object):
            print(path)
    except GitInternalsError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)
