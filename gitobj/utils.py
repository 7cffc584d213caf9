import os
import pathlib
from argparse import ArgumentParser

from gitobj.models import ObjectKind


def get_parser():
    parser = ArgumentParser(prog="gitobj")
    parser.add_argument(
        "--git-dir",
        type=pathlib.Path,
        default=pathlib.Path(os.environ.get("GIT_DIR", ".git")),
        help="object store root (default: $GIT_DIR or .git)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    parser.add_argument("--log-json", action="store_true", help="log as JSON lines")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init
    _init_parser = subparsers.add_parser("init")

    # cat-file
    cat_file_parser = subparsers.add_parser("cat-file")
    cat_file_parser.add_argument(
        "-p", "--pretty-print", action="store_true", help="pretty print"
    )
    cat_file_parser.add_argument(
        "hash",
    )

    # hash_object
    hash_object_parser = subparsers.add_parser("hash-object")
    hash_object_parser.add_argument("path", type=pathlib.Path)
    hash_object_parser.add_argument("-w", "--write", action="store_true")
    hash_object_parser.add_argument(
        "-t",
        "--type",
        dest="kind",
        type=ObjectKind,
        choices=list(ObjectKind),
        default=ObjectKind.BLOB,
    )

    # ls-tree
    ls_tree_parser = subparsers.add_parser("ls-tree")
    ls_tree_parser.add_argument("--name-only", action="store_true")
    ls_tree_parser.add_argument("hash_value")

    return parser
