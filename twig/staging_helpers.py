import logging

from .errors import UnknownReference
from .models import FileRecord, Tree

logger = logging.getLogger(__name__)


def replace_path(files: Tree, file: FileRecord) -> bool:
    """
    Put `file` in place of every record sharing its path, at the position of
    the first one. Returns False (and leaves `files` alone) if the path is absent.
    """
    positions = [index for index, existing in enumerate(files) if existing.path == file.path]
    if not positions:
        return False
    files[:] = [existing for existing in files if existing.path != file.path]
    files.insert(positions[0], file)
    return True


class WorkingArea:
    """
    The untracked, unstaged and staged records of a repository together with
    the contents recorded by the most recent commit.

    A record lives in at most one of the three lists. A path may be staged and
    have a newer unstaged edit at the same time.
    """

    def __init__(self) -> None:
        self.untracked: Tree = []
        self.unstaged: Tree = []
        self.staged: Tree = []
        self.previous_commit_contents: dict[str, str] = {}

    def new_file(self, path: str, content: str) -> FileRecord:
        if self.is_tracked(path):
            # a tracked path has one working copy, in unstaged
            return self.edit_file(path, content)
        file = FileRecord(path=path, content=content)
        if file not in self.untracked:
            self.untracked.append(file)
        return file

    def edit_file(self, path: str, content: str) -> FileRecord:
        file = FileRecord(path=path, content=content)
        if not self.is_tracked(path):
            if not replace_path(self.untracked, file):
                self.untracked.append(file)
            return file
        if file in self.staged:
            # back to the staged content, nothing left unstaged for this path
            self.unstaged[:] = [existing for existing in self.unstaged if existing.path != path]
        elif not replace_path(self.unstaged, file):
            self.unstaged.append(file)
        return file

    def add(self, *files: FileRecord) -> None:
        for file in files:
            if file in self.untracked:
                self.untracked.remove(file)
            # the staged copy supersedes whatever was tracked for this path
            self.unstaged[:] = [existing for existing in self.unstaged if existing.path != file.path]
            if not replace_path(self.staged, file):
                self.staged.append(file)
            logger.debug("staged %s", file.path)

    def is_tracked(self, path: str) -> bool:
        return path in self.previous_commit_contents or any(
            file.path == path for file in self.staged + self.unstaged
        )

    def find_file(self, path: str) -> FileRecord:
        for files in (self.untracked, self.unstaged, self.staged):
            for file in files:
                if file.path == path:
                    return file
        raise UnknownReference(path, f"file '{path}' is not in the working area")

    def modified_files(self) -> Tree:
        return [
            file
            for file in self.unstaged
            if file.path in self.previous_commit_contents
            and file.content != self.previous_commit_contents[file.path]
        ]

    def tracked_tree(self) -> Tree:
        staged_paths = {file.path for file in self.staged}
        return self.staged + [file for file in self.unstaged if file.path not in staged_paths]

    def take_snapshot(self, tree: Tree) -> None:
        self.previous_commit_contents = {file.path: file.content for file in tree}

    def reset_staging_area(self) -> None:
        # a newer unstaged edit stays the working copy of its path
        unstaged_paths = {file.path for file in self.unstaged}
        self.unstaged.extend(file for file in self.staged if file.path not in unstaged_paths)
        self.staged = []
