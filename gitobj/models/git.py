import os
import pathlib
import re
import sys
import tempfile
from os import PathLike

from gitobj.errors import (
    GitError,
    InvalidIdentity,
    IOFailure,
    MissingOption,
    ObjectNotFound,
    UninitializedStore,
    UnsupportedOperation,
)
from gitobj.log import get_logger
from gitobj.models import codec
from gitobj.models.objects import ObjectKind, StoredObject

__all__ = ["Git", "HEAD_CONTENT"]

HEAD_CONTENT = "ref: refs/heads/main\n"
OBJECT_MODE = 0o444
IDENTITY_PATTERN = re.compile(r"[0-9a-fA-F]{40}")

logger = get_logger(__name__)


class Git:
    def __init__(self, git_dir: PathLike = ".git"):
        self.git_folder = pathlib.Path(git_dir)
        self.objects_folder = self.git_folder / "objects"

    def init_repo(self):
        dirs = [self.git_folder, self.objects_folder, self.git_folder / "refs"]
        try:
            for new_path in dirs:
                new_path.mkdir(exist_ok=False, parents=True)
            with (self.git_folder / "HEAD").open("w") as f:
                f.write(HEAD_CONTENT)
        except OSError as exc:
            raise IOFailure("initialize", self.git_folder, exc) from exc

    def path_for(self, identity: str) -> pathlib.Path:
        if not IDENTITY_PATTERN.fullmatch(identity):
            raise InvalidIdentity(identity)
        identity = identity.lower()
        return self.objects_folder / identity[:2] / identity[2:]

    def _ensure_initialized(self):
        if not self.objects_folder.is_dir():
            raise UninitializedStore(self.objects_folder)

    def write(self, kind: ObjectKind, payload: bytes) -> str:
        """Store ``payload`` as an object of ``kind`` and return its identity.

        Writing content that is already stored leaves the existing file
        alone. New files are written next to their final path and renamed
        into place, so readers never see a partial object.
        """
        self._ensure_initialized()
        hash_value, compressed_data = codec.encode(kind, payload)
        path = self.path_for(hash_value)
        if path.exists():
            logger.debug("object.exists", identity=hash_value, kind=str(kind))
            return hash_value

        try:
            path.parent.mkdir(exist_ok=True)
        except OSError as exc:
            raise IOFailure("create object directory", path.parent, exc) from exc
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f"tmp_obj_{path.name[:8]}_")
        except OSError as exc:
            raise IOFailure("create temporary file in", path.parent, exc) from exc
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(compressed_data)
                f.flush()
                os.fsync(f.fileno())
            # loose objects are immutable
            os.chmod(tmp_name, OBJECT_MODE)
            os.replace(tmp_name, path)
        except OSError as exc:
            pathlib.Path(tmp_name).unlink(missing_ok=True)
            raise IOFailure("write object", path, exc) from exc

        logger.debug(
            "object.written",
            identity=hash_value,
            kind=str(kind),
            size=len(payload),
            path=str(path),
        )
        return hash_value

    def read(self, identity: str) -> StoredObject:
        self._ensure_initialized()
        path = self.path_for(identity)
        try:
            with path.open("rb") as f:
                data = f.read()
        except FileNotFoundError:
            raise ObjectNotFound(identity, path) from None
        except OSError as exc:
            raise IOFailure("read object", path, exc).annotate(identity=identity) from exc

        try:
            obj = codec.decode(codec.decompress(data))
        except GitError as exc:
            exc.annotate(identity=identity, path=path)
            raise
        logger.debug("object.read", identity=identity, kind=str(obj.kind), size=len(obj.body))
        return obj

    def dump_raw(self, identity: str, *, kind: ObjectKind) -> bytes:
        """Read an object that the caller knows how to display as ``kind``."""
        obj = self.read(identity)
        if obj.kind is not kind:
            raise UnsupportedOperation(
                f"{kind.renderable_by} can't print {obj.kind} objects",
                kind=obj.kind,
                identity=identity,
            )
        return obj.body

    def hash_object(
        self,
        path: pathlib.Path,
        *,
        kind: ObjectKind = ObjectKind.BLOB,
        write: bool = False,
        pretty_print: bool = True,
    ) -> str:
        if not write:
            raise MissingOption("-w", "hash-object")
        path = pathlib.Path(path)
        try:
            payload = path.read_bytes()
        except OSError as exc:
            raise IOFailure("read", path, exc) from exc
        hash_value = self.write(kind, payload)
        if pretty_print:
            sys.stdout.write(f"{hash_value}\n")
        return hash_value

    def cat_file(self, hash_: str, *, pretty_print: bool = False) -> bytes:
        if not pretty_print:
            raise MissingOption("-p", "cat-file")
        body = self.dump_raw(hash_, kind=ObjectKind.BLOB)
        self._write_stdout(body)
        return body

    def ls_tree(self, hash_value: str, *, name_only: bool = False) -> bytes:
        if name_only:
            raise UnsupportedOperation(
                "--name-only needs tree entry parsing, which is not supported",
                kind=ObjectKind.TREE,
                identity=hash_value,
            )
        body = self.dump_raw(hash_value, kind=ObjectKind.TREE)
        self._write_stdout(body)
        return body

    @staticmethod
    def _write_stdout(data: bytes):
        try:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        except OSError as exc:
            raise IOFailure("write", "<stdout>", exc) from exc
