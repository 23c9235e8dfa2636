import argparse

from ..common import add_file_arg, require_and_load_tunnel


def add_validate_cmd(subparsers: argparse._SubParsersAction) -> None:
    v = subparsers.add_parser(
        "validate",
        help="Parse and validate a tunnel configuration",
        description="Parses a wg-quick style tunnel configuration and reports the first error found.",
    )
    add_file_arg(v)
    v.set_defaults(func=run_validate_cmd)


def run_validate_cmd(args: argparse.Namespace) -> int:
    cfg = require_and_load_tunnel(args)
    if cfg is None:
        return 2
    print(f"Configuration is valid. ({len(cfg.peers)} peer{'' if len(cfg.peers) == 1 else 's'})")
    return 0
