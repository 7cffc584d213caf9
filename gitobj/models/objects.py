from dataclasses import dataclass
from enum import StrEnum, auto

from gitobj.errors import UnknownKind

__all__ = ["ObjectKind", "Header", "StoredObject"]


class ObjectKind(StrEnum):
    BLOB = auto()
    TREE = auto()

    @classmethod
    def parse(cls, token: str) -> "ObjectKind":
        try:
            return cls(token)
        except ValueError:
            raise UnknownKind(token) from None

    @property
    def renderable_by(self) -> str:
        """Name of the command that can print objects of this kind."""
        match self:
            case ObjectKind.BLOB:
                return "cat-file"
            case ObjectKind.TREE:
                return "ls-tree"
            case _:
                raise ValueError(f"Invalid ObjectKind: {self}")


@dataclass(frozen=True, kw_only=True)
class Header:
    kind: ObjectKind
    length: int
    # bytes taken by the header, NUL included
    size: int


@dataclass(frozen=True, kw_only=True)
class StoredObject:
    kind: ObjectKind
    body: bytes

    @property
    def header(self) -> bytes:
        return f"{self.kind} {len(self.body)}".encode()
