"""CLI entrypoint for sending a single icon to a dev host."""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

from ..config import ConfigError, load_config
from ..logging import configure_logging
from .sender import IconSender, SendRequest, parse_flags, parse_instance

PROG = "send-icon"

_FLAGS_TOKEN = re.compile(r"^-[A-Za-z0-9]+$")

USAGE = (
    f"{PROG} {{file name}} {{service name}} {{instance}} {{flags}}\n"
    "instance like v25d1, v5d3\n"
    "Flags:\n"
    "-b - for big icons\n"
    "-s - for small icons\n"
    "-4 - for 404 icons\n"
    "-t - for com.tr icons\n"
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Optimize an icon and scp it into dev-host templates.",
        add_help=False,
    )
    parser.add_argument("--verbose", action="store_true", default=False)
    parser.add_argument("--config", default=".", help="Directory holding .iconbundle.yml.")
    parser.add_argument("file_name", nargs="?")
    parser.add_argument("service", nargs="?")
    parser.add_argument("instance", nargs="?")
    parser.add_argument("flags", nargs="?")
    return parser


def print_help(reason: str) -> None:
    print(f"{reason}\n\n{USAGE}")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint: ``send-icon <fileName> <serviceName> <instance> <flags>``."""
    parser = _build_parser()
    args, extras = parser.parse_known_args(sys.argv[1:] if argv is None else argv)

    # "-bs4t" looks like an option to argparse; accept it as the flags positional.
    flags = args.flags
    leftovers = []
    for item in extras:
        if flags is None and _FLAGS_TOKEN.match(item):
            flags = item
        else:
            leftovers.append(item)
    if leftovers:
        parser.error(f"unrecognized arguments: {' '.join(leftovers)}")

    configure_logging(verbose=bool(args.verbose))

    if not args.file_name:
        print_help("No fileName")
        return
    if not args.service:
        print_help("No service name")
        return
    if not args.instance:
        print_help("No instance")
        return
    if not flags:
        print_help("No flags")
        return

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    dev, instance = parse_instance(args.instance)
    request = SendRequest(
        file_name=Path(args.file_name),
        service=args.service,
        dev=dev,
        instance=instance,
        flags=parse_flags(flags),
    )
    IconSender(config=config.send).send(request)


if __name__ == "__main__":
    main(sys.argv[1:])
