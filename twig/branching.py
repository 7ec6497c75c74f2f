import logging

from .errors import UnknownReference
from .models import BranchInfo

logger = logging.getLogger(__name__)


class BranchTable:
    """
    Local branch heads plus remote-tracking heads recorded by fetch.

    A head of None marks an unborn branch. Remote-tracking names are
    `<remote><separator><branch>` so two remotes never collide.
    """

    def __init__(self, default_branch: str, remote_separator: str = "__") -> None:
        self.heads: BranchInfo = {default_branch: None}
        self.remote_heads: BranchInfo = {}
        self.remote_separator = remote_separator

    def __contains__(self, branch_name: str) -> bool:
        return branch_name in self.heads

    def list_branches(self) -> list[str]:
        return list(self.heads.keys())

    def update_branch_head(self, branch_name: str, new_commit_id: str | None) -> None:
        self.heads[branch_name] = new_commit_id
        logger.debug("branch %s -> %s", branch_name, new_commit_id)

    def create_branch(self, branch_name: str, start_commit: str | None) -> None:
        # overwrites an existing branch of the same name
        self.update_branch_head(branch_name, start_commit)

    def delete_branch(self, branch_name: str) -> None:
        if branch_name in self.heads:
            del self.heads[branch_name]
            logger.debug("deleted branch %s", branch_name)

    def remote_branch_name(self, remote_name: str, branch_name: str) -> str:
        return f"{remote_name}{self.remote_separator}{branch_name}"

    def record_remote_branches(self, remote_name: str, remote_heads: BranchInfo) -> None:
        for branch_name, commit_id in remote_heads.items():
            self.remote_heads[self.remote_branch_name(remote_name, branch_name)] = commit_id

    def resolve(self, name: str) -> str | None:
        """Head of a local branch, falling back to remote-tracking branches."""
        if name in self.heads:
            return self.heads[name]
        if name in self.remote_heads:
            return self.remote_heads[name]
        raise UnknownReference(name, f"branch '{name}' does not exist")
