"""CLI entry-point for gitaudit.

Usage:
    gitaudit [target]
    gitaudit <path> --json [-o report.json]
    gitaudit owner/repo --compact --token TOKEN
    gitaudit https://github.com/owner/repo --markdown -o AUDIT.md
    gitaudit <path> --severity warning --type security
    gitaudit <path> --deterministic --json

Exit codes: 0 no critical issue shown, 1 at least one critical issue
shown, 2 target not found, remote unreachable or usage error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from gitaudit import __version__
from gitaudit.api import audit_target
from gitaudit.core.config import load_config
from gitaudit.errors import ConfigError, GitAuditError, TargetNotFoundError
from gitaudit.policy.exit_codes import exit_code_for_issues
from gitaudit.reports.exporters import export_json, export_markdown
from gitaudit.reports.filters import filter_report
from gitaudit.reports.terminal import render_compact, render_report
from gitaudit.utils.exit_codes import ExitCode

_logger = logging.getLogger("gitaudit")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gitaudit",
        description="Heuristic security, performance and quality audit "
        "for local directories and GitHub repositories.",
    )
    p.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Directory, file, owner/repo or GitHub URL (default: .)",
    )
    fmt = p.add_mutually_exclusive_group()
    fmt.add_argument("--json", action="store_true", help="Emit the JSON report.")
    fmt.add_argument(
        "--compact", action="store_true", help="One line per issue."
    )
    fmt.add_argument(
        "--markdown", action="store_true", help="Emit a Markdown report."
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the rendered report to FILE instead of stdout.",
    )
    p.add_argument(
        "--severity",
        default=None,
        help="Minimum severity to show: info, warning or critical.",
    )
    p.add_argument(
        "--type",
        dest="category",
        default=None,
        help="Only show one category: security, performance, quality or unused.",
    )
    p.add_argument("--token", default=None, help="GitHub API token.")
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: .gitaudit.yml in the target).",
    )
    p.add_argument(
        "--max-file-size",
        type=int,
        default=None,
        metavar="BYTES",
        help="Skip files larger than BYTES (default: 1 MiB).",
    )
    p.add_argument(
        "--deterministic",
        action="store_true",
        help="Pin the report timestamp for byte-identical output.",
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging on stderr."
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    _logger.handlers[:] = [handler]
    _logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _render(report, args: argparse.Namespace) -> str:
    if args.json:
        return export_json(report)
    if args.markdown:
        return export_markdown(report)
    if args.compact:
        return render_compact(report)
    return render_report(report)


def main(argv: list[str] | None = None) -> int:
    """Entry-point; returns an ``ExitCode``."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    target = Path(args.target).expanduser()
    try:
        config = load_config(
            root=target if target.is_dir() else None,
            config_path=args.config,
            overrides={
                "github_token": args.token,
                "max_file_bytes": args.max_file_size,
            },
        )
        report, _ = audit_target(
            args.target, config=config, deterministic=args.deterministic
        )
    except TargetNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR
    except ConfigError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return ExitCode.ERROR
    except GitAuditError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    shown = filter_report(report, min_severity=args.severity, category=args.category)
    text = _render(shown, args)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
        print(f"Report written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")

    return exit_code_for_issues(shown.issues)


if __name__ == "__main__":
    raise SystemExit(main())
