import sys

from gitobj.errors import GitError
from gitobj.log import configure_logging, get_logger
from gitobj.models import Git
from gitobj.utils import get_parser

logger = get_logger(__name__)


def run(git: Git, args):
    match args.command:
        case "init":
            git.init_repo()
            print(f"Initialized git directory in {git.git_folder}")
            return
        case "cat-file":
            return git.cat_file(args.hash, pretty_print=args.pretty_print)
        case "hash-object":
            return git.hash_object(args.path, kind=args.kind, write=args.write)
        case "ls-tree":
            return git.ls_tree(args.hash_value, name_only=args.name_only)
        case _:
            raise RuntimeError(f"Unknown command #{args.command}")


def main(argv=None) -> int:
    parser = get_parser()
    args = parser.parse_args(argv)
    configure_logging(json_output=args.log_json, level=args.log_level)

    git = Git(args.git_dir)
    try:
        run(git, args)
    except GitError as exc:
        logger.debug("command.failed", command=args.command, error=type(exc).__name__, **exc.context)
        sys.stderr.write(f"error: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
