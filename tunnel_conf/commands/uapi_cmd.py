import argparse
import sys

from ..common import add_file_arg, require_and_load_tunnel, write_output
from ..errors import ResolutionError
from ..writer import to_uapi


def add_uapi_cmd(subparsers: argparse._SubParsersAction) -> None:
    u = subparsers.add_parser(
        "uapi",
        help="Emit the control-protocol configuration stream",
        description=(
            "Parses a tunnel configuration and writes it as key=value lines for the tunnel runtime. "
            "Endpoint hostnames are resolved with the system resolver."
        ),
    )
    add_file_arg(u)
    u.add_argument("-o", "--output", default=None, help="Write to this file instead of stdout")
    u.add_argument("--overwrite", action="store_true", help="Overwrite output file if it exists")
    u.set_defaults(func=run_uapi_cmd)


def run_uapi_cmd(args: argparse.Namespace) -> int:
    cfg = require_and_load_tunnel(args)
    if cfg is None:
        return 2
    try:
        text = to_uapi(cfg)
    except ResolutionError as e:
        print(str(e), file=sys.stderr)
        return 2
    return write_output(text, getattr(args, "output", None), overwrite=bool(getattr(args, "overwrite", False)))
