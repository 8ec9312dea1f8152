import argparse
import logging
from commands import cat_file, list_branches, log, commit_tree
# The main entry point for the gitinternals object reader

def setup_logging(verbose): # Diagnostics go to stderr, command output stays on stdout
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

def build_parser():
    # The main parser
    parser = argparse.ArgumentParser(description="gitinternals: read blobs, trees and commits straight from a .git directory.")
    parser.add_argument("--git-dir", dest="git_dir", default=None, help="Path to the .git directory (defaults to $GIT_DIR, then the nearest .git above the current directory).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug information to stderr.")
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # Command: cat-file
    cat_file_parser = subparsers.add_parser("cat-file", help="Show the decoded content of an object.")
    cat_file_parser.add_argument("object", help="The 40 character hash of the object.")
    cat_file_parser.set_defaults(func=cat_file.run)

    # Command: list-branches
    list_branches_parser = subparsers.add_parser("list-branches", help="List branches, marking the current one.")
    list_branches_parser.set_defaults(func=list_branches.run)

    # Command: log
    log_parser = subparsers.add_parser("log", help="Show the commit log of a branch.")
    log_parser.add_argument("branch", help="The branch whose history to show.")
    log_parser.set_defaults(func=log.run)

    # Command: commit-tree
    commit_tree_parser = subparsers.add_parser("commit-tree", help="List all file paths in a commit's tree.")
    commit_tree_parser.add_argument("commit", help="The 40 character hash of the commit.")
    commit_tree_parser.set_defaults(func=commit_tree.run)

    return parser

def main(argv=None):
    parser = build_parser()
    # Parse the arguments
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    # If a command was specified, run its function
    if hasattr(args, 'func'):
        args.func(args)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
