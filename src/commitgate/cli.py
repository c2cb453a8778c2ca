# SPDX-License-Identifier: MIT
"""Command-line boundary: read messages, lint them, print the report, set the exit code.

Usage:
    python -m commitgate --edit .git/COMMIT_EDITMSG      # commit-msg hook
    python -m commitgate --from origin/main --to HEAD    # CI, a range of commits
    echo "feat(api): add endpoint" | python -m commitgate

Environment variables:
    COMMITGATE_CONFIG  - path to a JSON config (when --config is not given)
    GITHUB_OUTPUT      - if set, lint counts are appended as step outputs
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path

from commitgate.report import get_formatter
from commitgate.rules import ConfigurationError, LintResult, RuleEngine, load_config

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1


# Written by ``git commit --verbose``; everything below it is the staged diff.
SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def read_message_file(path: Path) -> str:
    """Read a commit message file the way git cleans it up before committing.

    Lines from the scissors marker onward are cut, ``#`` comment lines are
    dropped, and surrounding blank lines are trimmed.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    kept: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        if line == SCISSORS_LINE:
            break
        if line.startswith("#"):
            continue
        kept.append(line)
    return "\n".join(kept).strip("\n").rstrip()


def read_git_range(from_ref: str, to_ref: str = "HEAD") -> list[str]:
    """Return the full messages of commits in ``from_ref..to_ref``, newest first.

    Raises:
        RuntimeError: If ``git log`` fails.
    """
    result = subprocess.run(
        ["git", "log", "--format=%B%x00", f"{from_ref}..{to_ref}"],
        capture_output=True,
        text=True,
        timeout=60,
        check=False,
    )
    if result.returncode != 0:
        msg = f"git log {from_ref}..{to_ref} failed: {result.stderr.strip()}"
        raise RuntimeError(msg)
    # Every entry is terminated by NUL; the piece after the last NUL is padding.
    return [entry.strip("\n") for entry in result.stdout.split("\x00")[:-1]]


def _write_github_output(results: list[LintResult]) -> None:
    github_output = os.environ.get("GITHUB_OUTPUT", "")
    if not github_output:
        return
    with open(github_output, "a", encoding="utf-8") as f:
        f.write(f"valid={str(all(r.valid for r in results)).lower()}\n")
        f.write(f"commit-count={len(results)}\n")
        f.write(f"error-count={sum(len(r.errors) for r in results)}\n")
        f.write(f"warning-count={sum(len(r.warnings) for r in results)}\n")


def main(
    *,
    config_path: str | None = None,
    formatter: str | None = None,
    edit: str | None = None,
    from_ref: str | None = None,
    to_ref: str = "HEAD",
    workers: int | None = None,
    quiet: bool = False,
    verbose: bool = False,
) -> int:
    """Lint commit messages and return the process exit code.

    Exit 0 iff every linted message is valid. Warnings never fail. Any
    configuration problem fails before a single message is linted.
    """
    # 1. Configuration, fully validated up front
    try:
        config = load_config(config_path)
        fmt = get_formatter(formatter or config.formatter, verbose=verbose)
    except ConfigurationError as exc:
        print(f"::error::Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_FAILED

    # 2. Messages
    try:
        if edit is not None:
            messages = [read_message_file(Path(edit))]
        elif from_ref is not None:
            messages = read_git_range(from_ref, to_ref)
        else:
            messages = [sys.stdin.read().rstrip("\r\n")]
    except (OSError, UnicodeDecodeError, RuntimeError, subprocess.TimeoutExpired) as exc:
        print(f"::error::Failed to read commit messages: {exc}", file=sys.stderr)
        return EXIT_FAILED

    if not messages:
        log.info("No commits to lint")
        return EXIT_OK

    # 3. Lint
    engine = RuleEngine(config)
    results = engine.lint_many(messages, workers=workers)
    failed = engine.check_gate(results)

    # 4. Report
    if not (quiet and not failed):
        report = fmt.format_many(results, help_url=config.help_url)
        if report.text:
            print(report.text)

    _write_github_output(results)
    return EXIT_FAILED if failed else EXIT_OK
