# The command: gitinternals cat-file <object-hash>
# What it does: Shows the decoded content of any blob, tree or commit object
# How it does: Reads and decodes the object, then picks a printer by matching on the object's type. Blobs print their lines, trees one `<mode> <hash> <name>` row per entry, commits their header fields and message
# What data structure it uses: Tagged Union (Blob | Tree | Commit) dispatched with pattern matching

import sys
from utils import config, objects
from utils.errors import GitInternalsError


def format_object(obj): # Returns the printable lines for a decoded object
    match obj:
        case objects.Blob(lines=lines):
            return ['*BLOB*', *lines]
        case objects.Tree(entries=entries):
            return ['*TREE*'] + [f"{e.mode} {e.id} {e.name}" for e in entries]
        case objects.Commit():
            lines = ['*COMMIT*', f"tree: {obj.tree}"]
            if obj.parents:
                lines.append(f"parents: {' | '.join(obj.parents)}")
            lines.append(f"author: {obj.author.name} {obj.author.email} original timestamp: {obj.author.timestamp}")
            lines.append(f"committer: {obj.committer.name} {obj.committer.email} commit timestamp: {obj.committer.timestamp}")
            lines.append("commit message:")
            lines.extend(obj.message)
            return lines
    raise TypeError(f"Cannot format {type(obj).__name__}")


def run(args):
    git_dir = config.require_git_dir(args.git_dir)

    if not objects.is_object_id(args.object):
        print(f"fatal: Not a valid object name {args.object}", file=sys.stderr)
        sys.exit(1)

    try:
        obj = objects.read_object(git_dir, args.object)
    except GitInternalsError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    print("\n".join(format_object(obj)))
