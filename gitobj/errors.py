from os import PathLike

__all__ = [
    "GitError",
    "InvalidIdentity",
    "MissingOption",
    "UninitializedStore",
    "ObjectNotFound",
    "IOFailure",
    "UnsupportedOperation",
    "ObjectFormatError",
    "CorruptObject",
    "MalformedHeader",
    "UnknownKind",
    "TruncatedObject",
    "TrailingData",
]


class GitError(Exception):
    """Base error for every failure raised by the object store.

    ``identity`` and ``path`` are filled in by whichever layer knows them,
    so a codec failure raised on raw bytes still reports the object it
    came from once the store re-raises it.
    """

    def __init__(self, message: str, *, identity: str | None = None, path: PathLike | None = None):
        super().__init__(message)
        self.message = message
        self.identity = identity
        self.path = path

    def annotate(self, *, identity: str | None = None, path: PathLike | None = None):
        if identity is not None and self.identity is None:
            self.identity = identity
        if path is not None and self.path is None:
            self.path = path
        return self

    @property
    def context(self) -> dict:
        return {
            key: str(value)
            for key, value in (("identity", self.identity), ("path", self.path))
            if value is not None
        }

    def __str__(self):
        if self.identity is not None:
            return f"{self.message} (object {self.identity})"
        return self.message


class InvalidIdentity(GitError):
    def __init__(self, identity: str):
        super().__init__(f"Not a valid object name: {identity!r}")
        self.value = identity


class MissingOption(GitError):
    def __init__(self, option: str, command: str):
        super().__init__(f"{command} needs the {option} option")
        self.option = option
        self.command = command


class UninitializedStore(GitError):
    def __init__(self, path: PathLike):
        super().__init__(f"Not a git repository (missing {path})", path=path)


class ObjectNotFound(GitError):
    def __init__(self, identity: str, path: PathLike):
        super().__init__("Object not found", identity=identity, path=path)


class IOFailure(GitError):
    def __init__(self, action: str, path: PathLike, error: OSError):
        super().__init__(f"Failed to {action} {path}: {error.strerror or error}", path=path)
        self.error = error


class UnsupportedOperation(GitError):
    def __init__(self, message: str, *, kind: str | None = None, identity: str | None = None):
        super().__init__(message, identity=identity)
        self.kind = kind


class ObjectFormatError(GitError):
    """The stored bytes of an object do not form a valid frame."""


class CorruptObject(ObjectFormatError):
    def __init__(self, reason: str):
        super().__init__(f"Object data is not valid zlib data: {reason}")


class MalformedHeader(ObjectFormatError):
    def __init__(self, reason: str, header: bytes = b""):
        super().__init__(f"Malformed object header {header!r}: {reason}")
        self.header = header


class UnknownKind(ObjectFormatError):
    def __init__(self, kind: str):
        super().__init__(f"Unknown object type {kind!r}")
        self.kind = kind


class TruncatedObject(ObjectFormatError):
    def __init__(self, declared: int, actual: int):
        super().__init__(f"Object is truncated: header declares {declared} bytes, found {actual}")
        self.declared = declared
        self.actual = actual


class TrailingData(ObjectFormatError):
    def __init__(self, declared: int):
        super().__init__(f"Object has trailing data beyond the declared {declared} bytes")
        self.declared = declared
