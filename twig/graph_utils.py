from collections import deque

from .models import Commit


def reachable_commits(commits: dict[str, Commit], head_commit: str) -> dict[str, Commit]:
    reachable: dict[str, Commit] = {}
    stack = [head_commit]
    while stack:
        commit_id = stack.pop()
        if commit_id in reachable or commit_id not in commits:
            continue
        commit = commits[commit_id]
        reachable[commit_id] = commit
        stack.extend(parent for parent in commit.parents if parent not in reachable)
    return reachable


def topological_history(commits: dict[str, Commit], head_commit: str | None) -> list[Commit]:
    """
    Commits reachable from `head_commit`, each listed before its parents.
    """
    if head_commit is None or head_commit not in commits:
        return []
    reachable = reachable_commits(commits, head_commit)

    indegree = {commit_id: 0 for commit_id in reachable}
    for commit in reachable.values():
        for parent_id in commit.parents:
            if parent_id in indegree:
                indegree[parent_id] += 1

    history = []
    queue = deque([head_commit])
    while queue:
        commit = reachable[queue.popleft()]
        history.append(commit)
        for parent_id in commit.parents:
            if parent_id in indegree:
                indegree[parent_id] -= 1
                if indegree[parent_id] == 0:
                    queue.append(parent_id)
    return history
