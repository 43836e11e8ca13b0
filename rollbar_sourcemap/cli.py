"""Command-line entry point: upload source maps for an existing build.

Reads the bundler's stats JSON, replays the after-emit hook with the
RollbarSourceMap plugin attached, and reports what the plugin added to
the compilation's errors and warnings.

Options default to ROLLBAR_* environment variables (see config.Settings);
flags given on the command line take precedence.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

import structlog

from rollbar_sourcemap.compilation import Compiler, StatsCompilation
from rollbar_sourcemap.config import Settings, get_settings
from rollbar_sourcemap.logging import configure_structlog
from rollbar_sourcemap.plugin import RollbarSourceMap
from rollbar_sourcemap.types import RollbarSourceMapOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rollbar-sourcemap",
        description="Upload emitted JavaScript source maps to Rollbar.",
    )
    parser.add_argument("--stats", required=True, help="Path to the bundler's stats.json")
    parser.add_argument(
        "--output-path",
        help="Directory the assets were emitted to (default: outputPath from the stats file)",
    )
    parser.add_argument("--access-token", help="Rollbar post_server_item access token")
    parser.add_argument("--version", dest="code_version", help="Code version of this build")
    parser.add_argument("--public-path", help="Base URL the minified files are served from")
    parser.add_argument(
        "--include-chunk",
        action="append",
        dest="include_chunks",
        metavar="NAME",
        help="Only upload this chunk (repeatable)",
    )
    parser.add_argument("--endpoint", help="Rollbar source map endpoint")
    parser.add_argument("--silent", action="store_true", default=None)
    parser.add_argument("--ignore-errors", action="store_true", default=None)
    parser.add_argument("--encode-filename", action="store_true", default=None)
    parser.add_argument("--debug", action="store_true", default=None)
    return parser


def _merge_options(args: argparse.Namespace, settings: Settings) -> RollbarSourceMapOptions:
    """Command-line flags override values from the environment."""
    options = settings.to_options()
    overrides = {
        "access_token": args.access_token,
        "version": args.code_version,
        "public_path": args.public_path,
        "include_chunks": args.include_chunks,
        "rollbar_endpoint": args.endpoint,
        "silent": args.silent,
        "ignore_errors": args.ignore_errors,
        "encode_filename": args.encode_filename,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(options, name, value)
    return options


async def run(options: RollbarSourceMapOptions, compilation: StatsCompilation) -> StatsCompilation:
    compiler = Compiler()
    RollbarSourceMap(options).apply(compiler)
    await compiler.emit(compilation)
    return compilation


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_structlog(debug=bool(args.debug if args.debug is not None else settings.debug))
    logger = structlog.get_logger("rollbar_sourcemap")

    try:
        compilation = StatsCompilation.from_stats_file(args.stats, args.output_path)
    except (OSError, ValueError) as exc:
        logger.error("stats_unreadable", path=args.stats, error=str(exc))
        return 2

    run_result = asyncio.run(run(_merge_options(args, settings), compilation))

    for warning in run_result.warnings:
        print(f"WARNING {warning}", file=sys.stderr)
    for error in run_result.errors:
        print(f"ERROR {error}", file=sys.stderr)

    logger.info(
        "upload_finished",
        errors=len(run_result.errors),
        warnings=len(run_result.warnings),
    )
    return 1 if run_result.errors else 0


if __name__ == "__main__":
    sys.exit(main())
