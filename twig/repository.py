import logging

from .branching import BranchTable
from .commit_helpers import (
    IdGenerator,
    allocate_commit_id,
    build_commit,
    get_commit_info,
    random_commit_id_generator,
)
from .errors import MergeConflict, RemoteDoesNotExist, TwigError, UnknownReference
from .graph_utils import topological_history
from .merging import (
    conflicting_paths,
    has_merge_conflict,
    merge_commit_message,
    merge_trees,
    resolve_conflicts,
)
from .models import (
    BranchInfo,
    BranchOptions,
    CheckoutOptions,
    Commit,
    FileRecord,
    RemoteCommand,
    Tree,
)
from .settings import Settings, get_settings
from .staging_helpers import WorkingArea

logger = logging.getLogger(__name__)


class Repository:
    """
    In-memory repository: one working area, a branch table, HEAD and every
    commit ever created or fetched, keyed by id.

    Operations raise before touching any state, so a failed call leaves the
    repository as it was. Not thread safe.
    """

    def __init__(
        self,
        name: str,
        settings: Settings | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self.name = name
        self.settings = settings or get_settings()
        self.id_generator = id_generator or random_commit_id_generator(
            self.settings.commit_id_length
        )

        self.working_area = WorkingArea()
        self.branch_table = BranchTable(
            self.settings.default_branch, self.settings.remote_separator
        )
        self.head = self.settings.default_branch
        self.commits: dict[str, Commit] = {}
        self.remotes: dict[str, Repository] = {}

    def __repr__(self) -> str:
        return f"Repository(name={self.name!r}, head={self.head!r}, commits={len(self.commits)})"

    @property
    def branches(self) -> BranchInfo:
        return self.branch_table.heads

    @property
    def remote_branches(self) -> BranchInfo:
        return self.branch_table.remote_heads

    @property
    def staged(self) -> Tree:
        return self.working_area.staged

    @property
    def unstaged(self) -> Tree:
        return self.working_area.unstaged

    @property
    def untracked(self) -> Tree:
        return self.working_area.untracked

    @property
    def previous_commit_contents(self) -> dict[str, str]:
        return self.working_area.previous_commit_contents

    # working area

    def new_file(self, path: str, content: str) -> FileRecord:
        return self.working_area.new_file(path, content)

    def edit_file(self, path: str, content: str) -> FileRecord:
        return self.working_area.edit_file(path, content)

    def find_file(self, path: str) -> FileRecord:
        return self.working_area.find_file(path)

    def add(self, *files: FileRecord) -> None:
        self.working_area.add(*files)

    def modified_files(self) -> Tree:
        return self.working_area.modified_files()

    # history

    def current_commit(self) -> Commit | None:
        commit_id = self.branches.get(self.head)
        if commit_id is None:
            return None
        return get_commit_info(self.commits, commit_id)

    def commit(self, message: str) -> Commit:
        tree = self.working_area.tracked_tree()
        commit_id = allocate_commit_id(self.commits, self.id_generator)
        new_commit = build_commit(commit_id, tree, message, [self.branches.get(self.head)])

        self.working_area.take_snapshot(tree)
        self.working_area.reset_staging_area()
        self._add_new_commit(new_commit)

        logger.info("[%s] %s %s", self.head, new_commit.id, message)
        return new_commit

    def _add_new_commit(self, commit: Commit) -> None:
        self.commits[commit.id] = commit
        self.branch_table.update_branch_head(self.head, commit.id)

    def reset(self, commit_id: str) -> None:
        commit = get_commit_info(self.commits, commit_id)
        self.branch_table.update_branch_head(self.head, commit.id)

    # branches

    def list_branches(self) -> list[str]:
        return self.branch_table.list_branches()

    def branch(self, name: str, options: BranchOptions | None = None) -> None:
        options = options or BranchOptions()
        if options.delete:
            self.branch_table.delete_branch(name)
        else:
            self.branch_table.create_branch(name, self.branches.get(self.head))

    def checkout(self, name: str, options: CheckoutOptions | None = None) -> None:
        options = options or CheckoutOptions()
        if options.create_branch:
            self.branch(name)
        elif name not in self.branch_table:
            raise UnknownReference(name, f"branch '{name}' does not exist")
        self.head = name

    # merging

    def merge(self, source_branch: str, conflict_resolution_branch: str | None = None) -> Commit:
        """
        Merge `source_branch` into the branch HEAD points at.

        Conflicting paths are settled with the tip of `conflict_resolution_branch`;
        without one, MergeConflict is raised and nothing changes. If HEAD's
        branch is unborn it is fast-forwarded to the source tip instead.
        """
        first_parent = self.branch_table.resolve(source_branch)
        if first_parent is None:
            raise UnknownReference(source_branch, f"branch '{source_branch}' has no commits")
        first_commit = get_commit_info(self.commits, first_parent)

        second_parent = self.branches.get(self.head)
        if second_parent is None:
            self.branch_table.update_branch_head(self.head, first_parent)
            logger.info("fast-forwarded %s to %s", self.head, first_parent)
            return first_commit
        second_commit = get_commit_info(self.commits, second_parent)

        tree = merge_trees(list(first_commit.tree), list(second_commit.tree))
        if has_merge_conflict(tree):
            if conflict_resolution_branch is None:
                paths = conflicting_paths(tree)
                logger.warning(
                    "cannot merge %s into %s, conflicts in %s",
                    source_branch,
                    self.head,
                    ", ".join(paths),
                )
                raise MergeConflict(paths)
            resolution_commit = get_commit_info(
                self.commits, self.branch_table.resolve(conflict_resolution_branch)
            )
            tree = resolve_conflicts(tree, list(resolution_commit.tree))

        merge_commit = build_commit(
            allocate_commit_id(self.commits, self.id_generator),
            tree,
            merge_commit_message(source_branch, self.head),
            [first_parent, second_parent],
        )
        self._add_new_commit(merge_commit)

        logger.info("merged %s into %s as %s", source_branch, self.head, merge_commit.id)
        return merge_commit

    # remotes

    def remote(self, command: RemoteCommand | str, repo: "Repository | str") -> None:
        try:
            command = RemoteCommand(command)
        except ValueError as e:
            raise TwigError(f"unknown remote command: {command}") from e
        if command is RemoteCommand.ADD:
            if not isinstance(repo, Repository):
                raise RemoteDoesNotExist(repo)
            self.remotes[repo.name] = repo
            return

        name = repo.name if isinstance(repo, Repository) else repo
        if name not in self.remotes:
            raise RemoteDoesNotExist(name)
        del self.remotes[name]

    def _get_remote(self, other: "Repository | str") -> "Repository":
        if isinstance(other, Repository):
            return other
        if other not in self.remotes:
            raise RemoteDoesNotExist(other)
        return self.remotes[other]

    def fetch(self, other: "Repository | str") -> None:
        other = self._get_remote(other)
        self.branch_table.record_remote_branches(other.name, dict(other.branches))
        fetched = 0
        for commit_id, commit in other.commits.items():
            if commit_id not in self.commits:
                self.commits[commit_id] = commit
                fetched += 1
        logger.info("fetched %d commits from %s", fetched, other.name)

    def pull(
        self,
        other: "Repository | str",
        branch: str,
        conflict_resolution_branch: str | None = None,
    ) -> Commit:
        other = self._get_remote(other)
        if branch not in other.branch_table:
            raise UnknownReference(branch, f"branch '{branch}' does not exist in {other.name}")
        self.fetch(other)
        return self.merge(
            self.branch_table.remote_branch_name(other.name, branch),
            conflict_resolution_branch,
        )

    # reporting

    def status(self) -> str:
        lines = [f"On branch {self.head}"]
        modified = self.modified_files()
        if not modified and not self.staged:
            lines.append("nothing to commit, working directory clean")
        if modified:
            lines.append("Changes not staged for commit:")
            lines.extend(f"\t{file.path}" for file in modified)
        if self.staged:
            lines.append("Changes to be committed:")
            lines.extend(f"\t{file.path}" for file in self.staged)
        return "\n".join(lines)

    def log(self, branch: str | None = None) -> str:
        if branch is None:
            commits = list(reversed(self.commits.values()))
        else:
            commits = topological_history(self.commits, self.branch_table.resolve(branch))
        return "\n".join(f"* {commit.message}" for commit in commits)
