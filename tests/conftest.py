import itertools

import pytest

from twig.commit_helpers import IdGenerator
from twig.repository import Repository
from twig.settings import Settings


def sequential_ids(prefix: str = "c") -> IdGenerator:
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


@pytest.fixture
def settings() -> Settings:
    return Settings(default_branch="master", commit_id_length=7, remote_separator="__")


@pytest.fixture
def repo(settings: Settings) -> Repository:
    return Repository("name", settings, sequential_ids())


@pytest.fixture
def make_repo(settings: Settings):
    """Repositories whose ids never collide with each other."""

    def factory(name: str) -> Repository:
        return Repository(name, settings, sequential_ids(f"{name}-"))

    return factory
