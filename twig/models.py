from enum import Enum
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict


class FileRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    content: str


class Commit(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    tree: tuple[FileRecord, ...]
    message: str
    parents: tuple[str, ...] = ()

class BranchOptions(BaseModel):
    delete: bool = False

class CheckoutOptions(BaseModel):
    create_branch: bool = False

class RemoteCommand(str, Enum):
    ADD = "add"
    REMOVE = "remove"

Tree: TypeAlias = list[FileRecord]
BranchInfo: TypeAlias = dict[str, str | None]
