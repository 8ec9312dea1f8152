# The command: gitinternals list-branches
# What it does: Lists all branches, marking the one HEAD points to with an asterisk
# How it does: Reads the branch names from `refs/heads` and the current branch from `HEAD`
# What data structure it uses: List (to hold branch names for sorting and display)

import sys
from utils import config, repository


def run(args):
    git_dir = config.require_git_dir(args.git_dir)

    try:
        current_branch = repository.get_current_branch(git_dir)
    except OSError as e:
        print(f"fatal: could not read HEAD: {e}", file=sys.stderr)
        sys.exit(1)

    for branch in repository.get_all_branches(git_dir):
        if branch == current_branch:
            print(f"* {branch}")
        else:
            print(f"  {branch}")
