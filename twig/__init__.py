from .errors import MergeConflict, RemoteDoesNotExist, TwigError, UnknownReference
from .models import BranchOptions, CheckoutOptions, Commit, FileRecord, RemoteCommand
from .repository import Repository
from .settings import Settings, get_settings

__all__ = [
    "BranchOptions",
    "CheckoutOptions",
    "Commit",
    "FileRecord",
    "MergeConflict",
    "RemoteCommand",
    "RemoteDoesNotExist",
    "Repository",
    "Settings",
    "TwigError",
    "UnknownReference",
    "get_settings",
]
