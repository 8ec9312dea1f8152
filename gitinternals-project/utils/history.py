# What it does: Walks the commit history starting at one commit, the way `log` shows it
# How it does: A FIFO work queue of (commit hash, edge kind). Each dequeued commit is yielded; only mainline edges are expanded into their parents.
# For a merge commit the merged-in (second) parent is queued first as a MERGED edge and the mainline (first) parent after it, so the merged commit is shown but its own ancestry is not followed
# What data structure it uses: Queue (collections.deque) driving a breadth-first traversal of the commit Directed Acyclic Graph (DAG)

import enum
import logging
from collections import deque

from . import objects

logger = logging.getLogger(__name__)


class Edge(enum.Enum):
    MAINLINE = 'mainline'
    MERGED = 'merged'


def continuation_edges(commit): # The edges a mainline commit contributes to the queue
    parents = commit.parents
    if len(parents) == 1:
        return [(parents[0], Edge.MAINLINE)]
    if len(parents) == 2:
        return [(parents[1], Edge.MERGED), (parents[0], Edge.MAINLINE)]
    # Root commits end the walk. Octopus merges are not followed either
    return []


def walk_commits(git_dir, start_id):
    """
    Yields (Commit, Edge) pairs in visiting order, starting at `start_id`.
    Every object is read from the store as it is reached, nothing is cached.
    """
    queue = deque([(start_id, Edge.MAINLINE)])

    while queue:
        commit_id, edge = queue.popleft()
        obj = objects.read_object(git_dir, commit_id)

        match obj:
            case objects.Commit():
                yield obj, edge
            case _:
                logger.warning("skipping %s: expected a commit, found a %s", commit_id, obj.type)
                continue

        if edge is Edge.MAINLINE:
            edges = continuation_edges(obj)
            logger.debug("commit %s: queueing %d parent edge(s)", commit_id, len(edges))
            queue.extend(edges)
