import argparse
import sys

from ..common import add_file_arg, require_and_load_tunnel
from ..export import dump_yaml, to_yaml_dict


def add_show_cmd(subparsers: argparse._SubParsersAction) -> None:
    s = subparsers.add_parser(
        "show",
        help="Print a YAML summary of a tunnel",
        description="Prints interface and peer details as YAML. Private and preshared keys are not shown.",
    )
    add_file_arg(s)
    s.set_defaults(func=run_show_cmd)


def run_show_cmd(args: argparse.Namespace) -> int:
    cfg = require_and_load_tunnel(args)
    if cfg is None:
        return 2
    sys.stdout.write(dump_yaml(to_yaml_dict(cfg)))
    return 0
