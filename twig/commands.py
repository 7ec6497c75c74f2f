import argparse
import shlex
from collections.abc import Iterable
from typing import Callable

from .commit_helpers import IdGenerator
from .errors import TwigError
from .models import BranchOptions, CheckoutOptions, RemoteCommand
from .repository import Repository
from .settings import Settings, get_settings


class ScriptArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise TwigError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = ScriptArgumentParser(prog="twig", add_help=False)
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_parser(name: str, help: str) -> argparse.ArgumentParser:
        return subparsers.add_parser(name, help=help, add_help=False)

    repo_parser = add_parser("repo", help="Switch to (or create) a repository")
    repo_parser.add_argument("name")

    new_file_parser = add_parser("new_file", help="Create an untracked file")
    new_file_parser.add_argument("path")
    new_file_parser.add_argument("content")

    edit_parser = add_parser("edit", help="Change the content of a file")
    edit_parser.add_argument("path")
    edit_parser.add_argument("content")

    add_files_parser = add_parser("add", help="Stage files")
    add_files_parser.add_argument("paths", nargs="+")

    commit_parser = add_parser("commit", help="Commit staged changes")
    commit_parser.add_argument("-m", "--message", required=True)

    branch_parser = add_parser("branch", help="Create or delete a branch")
    branch_parser.add_argument("-D", "--delete", action="store_true")
    branch_parser.add_argument("name")

    add_parser("branches", help="List branches")

    checkout_parser = add_parser("checkout", help="Switch branches")
    checkout_parser.add_argument("-b", "--create", action="store_true")
    checkout_parser.add_argument("name")

    reset_parser = add_parser("reset", help="Point the current branch at a commit")
    reset_parser.add_argument("commit")

    merge_parser = add_parser("merge", help="Merge a branch into the current branch")
    merge_parser.add_argument("name")
    merge_parser.add_argument("-r", "--resolve-with", default=None)

    add_parser("status", help="Show the working area status")

    log_parser = add_parser("log", help="Show commit messages")
    log_parser.add_argument("branch", nargs="?", default=None)

    remote_parser = add_parser("remote", help="Register or drop a remote")
    remote_parser.add_argument("action", choices=[command.value for command in RemoteCommand])
    remote_parser.add_argument("name")

    fetch_parser = add_parser("fetch", help="Fetch branches and commits from a remote")
    fetch_parser.add_argument("remote")

    pull_parser = add_parser("pull", help="Fetch and merge a remote branch")
    pull_parser.add_argument("remote")
    pull_parser.add_argument("branch")
    pull_parser.add_argument("-r", "--resolve-with", default=None)

    return parser


class Session:
    """
    A set of named in-memory repositories driven by script lines.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        id_generator: IdGenerator | None = None,
        repository: str = "local",
    ) -> None:
        self.settings = settings or get_settings()
        self.id_generator = id_generator
        self.parser = build_parser()
        self.repositories: dict[str, Repository] = {}
        self.current = self.use(repository)

    def use(self, name: str) -> Repository:
        if name not in self.repositories:
            self.repositories[name] = Repository(name, self.settings, self.id_generator)
        self.current = self.repositories[name]
        return self.current

    def execute(self, line: str) -> None:
        try:
            words = shlex.split(line)
        except ValueError as e:
            raise TwigError(str(e)) from e
        args = self.parser.parse_args(words)
        map_command(args.command)(self, args)

    def run_script(self, lines: Iterable[str]) -> None:
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                self.execute(line)
            except TwigError as e:
                raise TwigError(f"line {line_number}: {e}") from e


def map_command(command: str) -> Callable[[Session, argparse.Namespace], None]:
    commandsMap = {
        "repo": repo,
        "new_file": new_file,
        "edit": edit,
        "add": add,
        "commit": commit,
        "branch": branch,
        "branches": branches,
        "checkout": checkout,
        "reset": reset,
        "merge": merge,
        "status": status,
        "log": log,
        "remote": remote,
        "fetch": fetch,
        "pull": pull,
    }
    if command not in commandsMap:
        raise TwigError(f"Unknown command: {command}")
    return commandsMap[command]


def repo(session: Session, args):
    session.use(args.name)


def new_file(session: Session, args):
    session.current.new_file(args.path, args.content)


def edit(session: Session, args):
    session.current.edit_file(args.path, args.content)


def add(session: Session, args):
    files = [session.current.find_file(path) for path in args.paths]
    session.current.add(*files)


def commit(session: Session, args):
    new_commit = session.current.commit(args.message)
    print(f"[{session.current.head} {new_commit.id}] {new_commit.message}")


def branch(session: Session, args):
    session.current.branch(args.name, BranchOptions(delete=args.delete))


def branches(session: Session, args):
    for branch_name in session.current.list_branches():
        prefix = "*" if branch_name == session.current.head else " "
        print(f"{prefix} {branch_name}")


def checkout(session: Session, args):
    session.current.checkout(args.name, CheckoutOptions(create_branch=args.create))
    print(f"Switched to branch '{args.name}'")


def reset(session: Session, args):
    session.current.reset(args.commit)


def merge(session: Session, args):
    merge_commit = session.current.merge(args.name, args.resolve_with)
    print(f"Merged {args.name} into {session.current.head} at {merge_commit.id}")


def status(session: Session, args):
    print(session.current.status())


def log(session: Session, args):
    output = session.current.log(args.branch)
    if output:
        print(output)


def remote(session: Session, args):
    if args.action == RemoteCommand.ADD.value:
        if args.name not in session.repositories:
            raise TwigError(f"repository '{args.name}' does not exist")
        session.current.remote(RemoteCommand.ADD, session.repositories[args.name])
    else:
        session.current.remote(RemoteCommand.REMOVE, args.name)


def fetch(session: Session, args):
    session.current.fetch(args.remote)


def pull(session: Session, args):
    merge_commit = session.current.pull(args.remote, args.branch, args.resolve_with)
    print(f"Pulled {args.remote}/{args.branch} into {session.current.head} at {merge_commit.id}")
