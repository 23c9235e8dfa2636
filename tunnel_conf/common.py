import os
import sys
from typing import Optional

from .errors import TunnelConfError
from .model import Config
from .parser import parse_config


def tunnel_name_for(path: str) -> str:
    base = os.path.basename(path)
    stem, ext = os.path.splitext(base)
    return stem if ext == ".conf" else base


def require_and_load_tunnel(args) -> Optional[Config]:
    path = args.file
    if path == "-":
        text = sys.stdin.read()
        name = getattr(args, "name", None) or ""
    else:
        if not os.path.exists(path):
            print(f"Tunnel file not found: {path}", file=sys.stderr)
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            print(f"Failed to read tunnel file: {e}", file=sys.stderr)
            return None
        name = getattr(args, "name", None) or tunnel_name_for(path)
    try:
        return parse_config(text, name=name)
    except TunnelConfError as e:
        where = f" (line {e.line_number})" if getattr(e, "line_number", None) else ""
        print(f"Failed to parse tunnel configuration{where}: {e}", file=sys.stderr)
        return None


def write_output(text: str, path: Optional[str], overwrite: bool = False) -> int:
    """Write to ``path`` with owner-only permissions, or to stdout when no path."""
    if not path:
        sys.stdout.write(text)
        return 0
    if os.path.exists(path) and not overwrite:
        print(f"Refusing to overwrite existing file: {path}. Use --overwrite to replace.", file=sys.stderr)
        return 2
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    try:
        os.chmod(path, 0o600)
    except OSError:
        pass
    return 0


def add_file_arg(parser) -> None:
    parser.add_argument("file", help="Tunnel configuration file (wg-quick format), or - for stdin")
    parser.add_argument("--name", default=None, help="Tunnel name. Default: file name without .conf")
