class TwigError(Exception):
    pass


class MergeConflict(TwigError):
    def __init__(self, paths: list[str]) -> None:
        self.paths = paths
        super().__init__(f"merge conflict in {', '.join(paths)}")


class RemoteDoesNotExist(TwigError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"remote '{name}' does not exist")


class UnknownReference(TwigError):
    def __init__(self, reference: str | None, message: str | None = None) -> None:
        self.reference = reference
        super().__init__(message or f"reference '{reference}' does not exist")
