# SPDX-License-Identifier: MIT
"""Package entry point: run the linter via `python -m commitgate`."""

import argparse
import logging
import sys

from commitgate.cli import main
from commitgate.report import FORMATTERS

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Lint commit messages against conventional-commit rules")
    parser.add_argument("--config", default=None, help="JSON config file (overrides COMMITGATE_CONFIG)")
    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default=None,
        help="Report formatter (overrides the config's formatter)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--edit", default=None, help="Read the message from a file, e.g. .git/COMMIT_EDITMSG")
    source.add_argument("--from", dest="from_ref", default=None, help="Lint commits in FROM..TO")
    parser.add_argument("--to", dest="to_ref", default="HEAD", help="End of the commit range (default: HEAD)")
    parser.add_argument("--workers", type=int, default=None, help="Lint messages on N threads")
    parser.add_argument("--quiet", action="store_true", help="Print nothing when every message is valid")
    parser.add_argument("--verbose", action="store_true", help="Report valid messages and debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(
        main(
            config_path=args.config,
            formatter=args.format,
            edit=args.edit,
            from_ref=args.from_ref,
            to_ref=args.to_ref,
            workers=args.workers,
            quiet=args.quiet,
            verbose=args.verbose,
        )
    )
