"""Command-line interface for safe merge."""

import argparse
import logging
import sys
from typing import Optional

from .errors import ContentMismatchError, SafeMergeError
from .executor import execute_plan
from .models import summarize_plan
from .planner import plan_merge
from .scanner import SUPPORTED_ALGORITHMS

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

COMMIT_FLAG = "--commit"

NOTES = """\
NOTE: never use trailing slashes for source_dir or target_dir.
NOTE: use --commit as a 3rd parameter to execute (default is always dry run).
NOTE: files are compared by hash when they exist in source and target,
      when the checksum doesn't match the program bails out always, before
      making any changes to the filesystem.
"""


class MergeArgumentParser(argparse.ArgumentParser):
    """Argument parser that prints the usage notes along with any usage error."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        print(file=sys.stderr)
        print(NOTES, file=sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; --commit is matched by position, not by argparse."""
    parser = MergeArgumentParser(
        prog="safe-merge",
        usage="%(prog)s [--hash {xxh64,md5}] [--verbose] source_dir target_dir [--commit]",
        description="Merge a source folder into a target folder, verifying overlapping files by hash.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog=NOTES + """
Examples:
  %(prog)s /path/to/source /path/to/target
  %(prog)s /path/to/source /path/to/target --commit
        """
    )

    parser.add_argument("source_dir", help="Folder to merge from")
    parser.add_argument("target_dir", help="Folder to merge into")

    parser.add_argument(
        "--hash",
        dest="algorithm",
        choices=SUPPORTED_ALGORITHMS,
        default="xxh64",
        help="Hash used to compare files present on both sides (default: xxh64)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every planning decision"
    )

    return parser


def operands(argv: list[str]) -> list[str]:
    """Return argv without the --hash and --verbose options, in order."""
    result = []
    skip_next = False
    for arg in argv:
        if skip_next:
            skip_next = False
        elif arg == "--hash":
            skip_next = True
        elif arg.startswith("--hash=") or arg in ("--verbose", "-v"):
            continue
        else:
            result.append(arg)
    return result


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Commit mode requires exactly three operands, the third being --commit.
    Anything else left over is ignored and the run stays a dry run.
    """
    if argv is None:
        argv = sys.argv[1:]
    args, extras = build_parser().parse_known_args(argv)
    args.commit = operands(argv) == [args.source_dir, args.target_dir, COMMIT_FLAG]
    args.ignored = [arg for arg in extras if not (args.commit and arg == COMMIT_FLAG)]
    return args


def validate_args(args: argparse.Namespace) -> None:
    """Reject trailing slashes on either directory argument."""
    if args.source_dir.endswith("/") or args.target_dir.endswith("/"):
        print("Do not use trailing slash when specifying directories.", file=sys.stderr)
        sys.exit(EXIT_USAGE)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send package log records to stderr, DEBUG when verbose else WARNING."""
    root = logging.getLogger("safe_merge")
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        root.addHandler(handler)
    return root


def report_mismatch(error: ContentMismatchError) -> None:
    """Print both digests and both paths of a content mismatch to stderr."""
    print(f"Hashes are NOT the same: {error.source_hash} and {error.destination_hash}", file=sys.stderr)
    print(f"Problematic files: {error.source} and {error.destination}. Bailing out!", file=sys.stderr)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    validate_args(args)
    setup_logging(args.verbose)

    if args.ignored:
        logger.debug("Ignoring extra arguments: %s", " ".join(args.ignored))

    if args.commit:
        print("Going to commit changes this time! No dry run!")

    try:
        plan = plan_merge(
            args.source_dir,
            args.target_dir,
            algorithm=args.algorithm,
            progress=sys.stderr.isatty()
        )
        # Only reached when planning completed: nothing is touched on mismatch
        execute_plan(plan, commit=args.commit)
    except ContentMismatchError as e:
        report_mismatch(e)
        sys.exit(EXIT_FAILURE)
    except (SafeMergeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        print("\nInterrupted!", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)

    summary = summarize_plan(plan)
    print(
        f"{summary.total} action(s) planned: "
        f"{summary.directories} director{'y' if summary.directories == 1 else 'ies'}, "
        f"{summary.files} file(s)"
    )
    if not args.commit and summary.total:
        print("Dry run, nothing was changed. Use --commit to apply.")
