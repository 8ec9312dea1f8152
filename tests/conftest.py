# Shared pytest fixtures for gitinternals tests

import pytest
import os
import sys
import shutil
import tempfile
import hashlib
import zlib
import io

# Add gitinternals-project to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'gitinternals-project'))


SIGNATURE = "Test <test@example.com> 1000000000 +0000"


def encode_object(obj_type, body): # Header + body, zlib-compressed, exactly as git stores a loose object
    data = f'{obj_type} {len(body)}\0'.encode() + body
    return zlib.compress(data)


class ObjectStore:
    # Writes loose objects into a test git directory and returns their hashes

    def __init__(self, git_dir):
        self.git_dir = git_dir

    def write(self, obj_type, body):
        data = f'{obj_type} {len(body)}\0'.encode() + body
        sha1 = hashlib.sha1(data).hexdigest()
        object_dir = os.path.join(self.git_dir, 'objects', sha1[:2])
        os.makedirs(object_dir, exist_ok=True)
        with open(os.path.join(object_dir, sha1[2:]), 'wb') as f:
            f.write(zlib.compress(data))
        return sha1

    def blob(self, text):
        return self.write('blob', text.encode())

    def tree(self, entries): # entries: list of (mode, name, hash), kept in the given order
        body = b''.join(
            f'{mode} {name}'.encode() + b'\0' + bytes.fromhex(sha1)
            for mode, name, sha1 in entries
        )
        return self.write('tree', body)

    def commit(self, tree, parents=(), message='commit', author=SIGNATURE, committer=SIGNATURE):
        lines = [f'tree {tree}']
        for parent in parents:
            lines.append(f'parent {parent}')
        lines.append(f'author {author}')
        lines.append(f'committer {committer}')
        lines.append('')
        lines.append(message)
        return self.write('commit', ('\n'.join(lines) + '\n').encode())

    def set_branch(self, name, sha1):
        branch_path = os.path.join(self.git_dir, 'refs', 'heads', *name.split('/'))
        os.makedirs(os.path.dirname(branch_path), exist_ok=True)
        with open(branch_path, 'w') as f:
            f.write(f"{sha1}\n")


@pytest.fixture
def temp_dir():
    # Creates a temporary directory that is cleaned up after the test
    # Also saves/restores cwd to prevent issues when tests change directories
    original_dir = os.getcwd()
    tmp = tempfile.mkdtemp()
    yield tmp
    os.chdir(original_dir)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def git_dir(temp_dir):
    # Creates the skeleton of a .git directory inside a temporary work tree
    path = os.path.join(temp_dir, '.git')
    os.makedirs(os.path.join(path, 'objects'))
    os.makedirs(os.path.join(path, 'refs', 'heads'))
    with open(os.path.join(path, 'HEAD'), 'w') as f:
        f.write('ref: refs/heads/master\n')
    with open(os.path.join(path, 'config'), 'w') as f:
        f.write('[core]\n')
        f.write('\trepositoryformatversion = 0\n')
        f.write('\tfilemode = true\n')
        f.write('\tbare = false\n')
    return path


@pytest.fixture
def store(git_dir):
    return ObjectStore(git_dir)


@pytest.fixture
def compressed():
    # Builds an in-memory compressed object source for decode_object
    def make(obj_type, body):
        return io.BytesIO(encode_object(obj_type, body))
    return make


@pytest.fixture
def repo_with_tree(store):
    # A snapshot with nested directories, entries deliberately not sorted
    #   README.md
    #   src/main.py
    #   src/lib/util.py
    #   a.txt
    readme = store.blob('# Project\n')
    main = store.blob('print("hi")\n')
    util = store.blob('def util():\n    pass\n')
    a_txt = store.blob('a\n')

    lib_tree = store.tree([('100644', 'util.py', util)])
    src_tree = store.tree([('100644', 'main.py', main), ('40000', 'lib', lib_tree)])
    root_tree = store.tree([
        ('100644', 'README.md', readme),
        ('40000', 'src', src_tree),
        ('100755', 'a.txt', a_txt),
    ])
    commit = store.commit(root_tree, message='Initial commit')
    store.set_branch('master', commit)
    return store.git_dir, commit, root_tree


@pytest.fixture
def repo_with_merge(store):
    # History (oldest first):
    #   root <- main1 <------ merge <- tip       (mainline)
    #       \                 /
    #        side1 <- side2 -'                   (merged-in branch)
    empty_tree = store.tree([])
    root = store.commit(empty_tree, message='root')
    main1 = store.commit(empty_tree, parents=[root], message='main one')
    side1 = store.commit(empty_tree, parents=[root], message='side one')
    side2 = store.commit(empty_tree, parents=[side1], message='side two')
    merge = store.commit(empty_tree, parents=[main1, side2], message='merge side')
    tip = store.commit(empty_tree, parents=[merge], message='tip')
    store.set_branch('master', tip)
    store.set_branch('side', side2)
    commits = {
        'root': root, 'main1': main1, 'side1': side1,
        'side2': side2, 'merge': merge, 'tip': tip,
    }
    return store.git_dir, commits
