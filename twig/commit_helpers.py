import random
from collections.abc import Iterable
from typing import Callable

from .errors import UnknownReference
from .models import Commit, FileRecord

IdGenerator = Callable[[], str]

ID_ALPHABET = "abcdef0123456789"


def random_commit_id_generator(length: int) -> IdGenerator:
    def get_new_commit_id() -> str:
        return "".join(random.choices(ID_ALPHABET, k=length))

    return get_new_commit_id


def allocate_commit_id(commits: dict[str, Commit], id_generator: IdGenerator) -> str:
    # ids only have to be unique within one repository
    while (commit_id := id_generator()) in commits:
        pass
    return commit_id


def build_commit(
    commit_id: str, tree: Iterable[FileRecord], message: str, parents: Iterable[str | None]
) -> Commit:
    return Commit(
        id=commit_id,
        tree=tuple(tree),
        message=message,
        parents=tuple(parent for parent in parents if parent is not None),
    )


def get_commit_info(commits: dict[str, Commit], commit_id: str | None) -> Commit:
    if commit_id is None or commit_id not in commits:
        raise UnknownReference(commit_id, f"commit {commit_id} does not exist")
    return commits[commit_id]
