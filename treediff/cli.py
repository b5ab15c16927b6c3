"""Command line entry point for treediff."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .config import ConfigBuilder
from .engine import DiffEngine
from .exceptions import TreeDiffError
from .loader import load_document
from .storage import load_results, save_results

logger = logging.getLogger(__name__)

EXIT_MATCH = 0
EXIT_DIFFERENCES = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treediff",
        description="Compare two JSON or YAML documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  treediff old.json new.json
  treediff -k -v config_a.yaml config_b.yaml
  treediff old.json new.json --array-same-order -w result.json
  treediff -r result.json
        """
    )

    parser.add_argument("file_a", nargs="?", help="Path to the first document")
    parser.add_argument("file_b", nargs="?", help="Path to the second document")

    parser.add_argument("-k", "--keys", action="store_true", help="Check for key differences")
    parser.add_argument("-t", "--types", action="store_true", help="Check for type differences")
    parser.add_argument("-v", "--values", action="store_true", help="Check for value differences")
    parser.add_argument("-a", "--arrays", action="store_true", help="Check for array differences")
    parser.add_argument(
        "--array-same-order",
        action="store_true",
        help="Compare arrays of equal length index by index"
    )
    parser.add_argument(
        "--no-mirror-tags",
        action="store_true",
        help="Only report AHas/BHas array differences"
    )
    parser.add_argument("-w", "--write", dest="write_to_file", help="Save results to a JSON file")
    parser.add_argument("-r", "--read", dest="read_from_file", help="Show previously saved results")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s"
    )

    if not args.read_from_file and not (args.file_a and args.file_b):
        parser.error("Two documents are required unless --read is given")

    try:
        if args.read_from_file:
            collection, context = load_results(args.read_from_file)
        else:
            check_all = not (args.keys or args.types or args.values or args.arrays)
            context = (
                ConfigBuilder()
                .file_a(args.file_a)
                .file_b(args.file_b)
                .array_same_order(args.array_same_order)
                .mirror_array_tags(not args.no_mirror_tags)
                .check_for_key_diffs(check_all or args.keys)
                .check_for_type_diffs(check_all or args.types)
                .check_for_value_diffs(check_all or args.values)
                .check_for_array_diffs(check_all or args.arrays)
                .build()
            )
            doc_a = load_document(args.file_a)
            doc_b = load_document(args.file_b)
            collection = DiffEngine().compare(doc_a, doc_b, context)

        if args.write_to_file:
            save_results(collection, context, args.write_to_file)
    except (TreeDiffError, FileNotFoundError) as e:
        logger.debug("Comparison aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if not args.quiet:
        collection.print_summary(context)
        if args.write_to_file:
            print(f"\nResults saved to: {args.write_to_file}")

    return EXIT_MATCH if collection.is_match else EXIT_DIFFERENCES


if __name__ == "__main__":
    sys.exit(main())
