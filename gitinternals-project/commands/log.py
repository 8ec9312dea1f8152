# The command: gitinternals log <branch-name>
# What it does: Displays the commit history of a branch, starting at its tip and walking backward through the parent links
# How it does: Resolves the branch to a commit hash and hands it to `history.walk_commits`, which visits the whole mainline down to the root commit.
# Commits brought in by a merge are shown once, tagged "(merged)", but their own history is not followed
# What data structure it uses: It performs a Graph Traversal (breadth-first, driven by a queue) on the Directed Acyclic Graph (DAG) formed by the commits

import sys
from utils import config, history, repository
from utils.errors import GitInternalsError


def format_entry(commit, edge): # Returns the printable lines for one log entry
    merged = " (merged)" if edge is history.Edge.MERGED else ""
    committer = commit.committer
    return [
        f"Commit: {commit.id}{merged}",
        f"{committer.name} {committer.email} commit timestamp: {committer.timestamp}",
        *commit.message,
    ]


def run(args):
    git_dir = config.require_git_dir(args.git_dir)

    try:
        commit_hash = repository.get_branch_commit(git_dir, args.branch)
        for commit, edge in history.walk_commits(git_dir, commit_hash):
            print("\n".join(format_entry(commit, edge)))
            print()
    except GitInternalsError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)
