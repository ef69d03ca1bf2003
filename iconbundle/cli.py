"""CLI entrypoints for iconbundle commands."""

from __future__ import annotations

import argparse
import sys

from .errors import IconBundleError
from .logging import configure_logging
from .runner import BuildRunner


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Node directory or config file (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconbundle",
        description="Build CSS icon bundles from SVG and raster sources.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Write the stylesheets configured in .iconbundle.yml.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_path_argument(build_parser)
    build_parser.add_argument(
        "--force",
        action="store_true",
        help="Rebuild every target even when sources are unchanged.",
    )

    targets_parser = subparsers.add_parser(
        "targets",
        help="List the targets the configuration would produce.",
    )
    _add_verbose_option(targets_parser, suppress_default=True)
    _add_path_argument(targets_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for iconbundle commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    runner = BuildRunner()

    if args.command == "build":
        try:
            report = runner.run(args.path, force=bool(getattr(args, "force", False)))
        except (IconBundleError, OSError) as exc:
            parser.exit(1, f"iconbundle build failed: {exc}\nRun with --verbose for more details.\n")
        for target in report.built:
            print(f"built {target}")
        if not report.built:
            print("All targets up to date")
    elif args.command == "targets":
        try:
            targets = runner.list_targets(args.path)
        except (IconBundleError, OSError) as exc:
            parser.exit(1, f"iconbundle targets failed: {exc}\n")
        for target in targets:
            print(target)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
