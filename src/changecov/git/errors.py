"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RefNotFoundError(GitError):
    """Reference (branch, tag, commit) not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


class NoMergeBaseError(GitError):
    """Two commits share no history."""

    def __init__(self, base: str, target: str) -> None:
        super().__init__(f"No common ancestor between {base} and {target}")
        self.base = base
        self.target = target


class RemoteError(GitError):
    """Error communicating with or looking up a remote."""

    def __init__(self, remote: str, message: str) -> None:
        super().__init__(f"Remote error ({remote}): {message}")
        self.remote = remote
