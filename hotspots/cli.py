"""CLI entrypoint for git-hotspots."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import workers
from .config import ConfigError, load_config
from .logging import configure_logging
from .pipeline import Pipeline, PipelineOptions
from .progress import BarProgress, NullProgress
from .render import render_table
from .version import version_line


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-hotspots",
        description="Find the functions that changed most often in a git repository.",
        epilog="Run `git-hotspots version` to print the version.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Root of the project to inspect (defaults to the current directory).",
    )
    parser.add_argument(
        "-r",
        "--root",
        dest="root_option",
        default=None,
        metavar="ROOT",
        help="Root of the project to inspect.",
    )
    parser.add_argument(
        "-t",
        "--total",
        type=_non_negative_int,
        default=None,
        help="Total number of results. Default: 50",
    )
    parser.add_argument(
        "-s",
        "--skip",
        type=_non_negative_int,
        default=None,
        help="Skip the first n results.",
    )
    parser.add_argument(
        "-p",
        "--prefix",
        action="append",
        default=[],
        help="Show results beginning with the given path. Can be repeated.",
    )
    parser.add_argument(
        "-v",
        "--invert-match",
        action="append",
        default=[],
        help="Exclude partially matched paths. Can be repeated.",
    )
    parser.add_argument(
        "-F",
        "--exclude-func",
        action="append",
        default=[],
        help="Exclude functions by partial name match. Can be repeated.",
    )
    parser.add_argument(
        "-V",
        "--log-level",
        action="count",
        default=0,
        help="Log level. Try -VV for more logs!",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .hotspots.yml file (defaults to the one in ROOT).",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not draw a progress bar.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for git-hotspots."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv[:1] == ["version"]:
        print(version_line())
        return 0

    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, log_file=args.log_file)

    root = args.root_option or args.root or "."
    root_path = Path(root).expanduser()
    if not root_path.exists():
        parser.exit(1, f"Repository path not found: {root}\n")
    if not root_path.is_dir():
        parser.exit(1, f"Repository path is not a directory: {root}\n")

    try:
        config = load_config(args.config if args.config is not None else root_path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    config = config.merged(
        total=args.total,
        skip=args.skip,
        prefixes=args.prefix,
        invert_match=args.invert_match,
        exclude_func=args.exclude_func,
    )
    workers.configure(config.workers)

    options = PipelineOptions(
        root=root,
        total=config.total,
        skip=config.skip,
        prefixes=config.prefixes,
        invert_match=config.invert_match,
        exclude_func=config.exclude_func,
        verbosity=args.log_level,
        git=config.git,
    )
    progress = NullProgress() if args.no_progress else BarProgress()
    try:
        rows = Pipeline(options, progress=progress).run()
    except RuntimeError as exc:
        parser.exit(1, f"git-hotspots failed: {exc}\nRun with -VVVV for more details.\n")
    finally:
        progress.close()
        workers.shutdown()

    print(render_table(rows))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
