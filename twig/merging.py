import logging

from .errors import MergeConflict
from .models import FileRecord, Tree

logger = logging.getLogger(__name__)


def merge_trees(first_tree: Tree, second_tree: Tree) -> Tree:
    """Union of two trees with exact duplicates removed, first occurrence kept."""
    merged: Tree = []
    seen: set[FileRecord] = set()
    for file in first_tree + second_tree:
        if file in seen:
            continue
        seen.add(file)
        merged.append(file)
    return merged


def conflicting_paths(tree: Tree) -> list[str]:
    counts: dict[str, int] = {}
    for file in tree:
        counts[file.path] = counts.get(file.path, 0) + 1
    return [path for path, count in counts.items() if count > 1]


def has_merge_conflict(tree: Tree) -> bool:
    return len(tree) != len({file.path for file in tree})


def resolve_conflicts(tree: Tree, resolution_tree: Tree) -> Tree:
    """
    Replace every conflicting path in `tree` with the record the resolution
    tree holds for it. Non-conflicting records are kept as they are.

    Raises MergeConflict for conflicting paths the resolution tree cannot
    settle, i.e. where it holds no record or several records for the path.
    """
    winners: dict[str, FileRecord] = {}
    unresolved = []
    for path in conflicting_paths(tree):
        candidates = list(dict.fromkeys(file for file in resolution_tree if file.path == path))
        if len(candidates) != 1:
            unresolved.append(path)
            continue
        winners[path] = candidates[0]

    if unresolved:
        raise MergeConflict(unresolved)

    resolved: Tree = []
    for file in tree:
        if file.path not in winners:
            resolved.append(file)
        elif winners[file.path] not in resolved:
            resolved.append(winners[file.path])
    logger.debug("resolved conflicts in %s", ", ".join(winners))
    return resolved


def merge_commit_message(source_branch: str, target_branch: str) -> str:
    return f"Merge branch {source_branch} into {target_branch}"
