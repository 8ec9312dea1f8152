# What it does: Knows where things live inside a .git directory: loose objects, branch refs and HEAD
# How it does: Objects are found by splitting the hash into a 2 character directory and a 38 character file name under `objects`.
# Branches are files in `refs/heads` holding a single hash line, and HEAD holds `ref: refs/heads/<name>`. `find_git_dir` walks up the directory tree to locate `.git`
# What data structure it uses: Uses recursion (linear recursion) to find the git directory. Conceptually, it manages pointers (HEAD and the branch files), which link into the commit graph

import os
import re

from .errors import RefNotFound

HEAD_REF_RE = re.compile(r'ref: refs/heads/(.*)')


def is_git_dir(path): # A git directory has HEAD and an objects store
    return os.path.isfile(os.path.join(path, 'HEAD')) and os.path.isdir(os.path.join(path, 'objects'))


def find_git_dir(path='.'): # Recursively searches upward for a .git directory, or accepts a bare git directory as is
    path = os.path.abspath(path)
    if is_git_dir(path):
        return path
    git_dir = os.path.join(path, '.git')
    if os.path.isdir(git_dir):
        return git_dir
    parent_path = os.path.dirname(path)
    if parent_path == path:
        return None
    return find_git_dir(parent_path)


def object_path(git_dir, object_id): # objects/<first 2 hex chars>/<remaining 38>
    return os.path.join(git_dir, 'objects', object_id[:2], object_id[2:])


def get_current_branch(git_dir): # Retrieves the branch HEAD points to, or None in detached HEAD state
    head_path = os.path.join(git_dir, 'HEAD')
    with open(head_path, 'r') as f:
        head_content = f.readline().strip()
    match = HEAD_REF_RE.search(head_content)
    if match:
        return match.group(1)
    return None


def get_all_branches(git_dir): # Lists branch names under refs/heads, sorted, nested names joined with '/'
    branches_dir = os.path.join(git_dir, 'refs', 'heads')
    if not os.path.isdir(branches_dir):
        return []
    branches = []
    for root, _, files in os.walk(branches_dir):
        for name in files:
            rel_path = os.path.relpath(os.path.join(root, name), branches_dir)
            branches.append(rel_path.replace(os.sep, '/'))
    return sorted(branches)


def get_branch_commit(git_dir, branch_name): # Retrieves the commit hash a branch points to
    branch_path = os.path.join(git_dir, 'refs', 'heads', *branch_name.split('/'))
    if not os.path.isfile(branch_path):
        raise RefNotFound(branch_name)
    with open(branch_path, 'r') as f:
        return f.readline().strip()
