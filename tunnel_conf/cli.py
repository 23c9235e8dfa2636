import argparse
import os
import sys
from typing import Callable, Optional

from .commands.format_cmd import add_format_cmd
from .commands.keys_cmd import add_keys_cmds
from .commands.show_cmd import add_show_cmd
from .commands.uapi_cmd import add_uapi_cmd
from .commands.validate_cmd import add_validate_cmd
from .config import Settings
from .logging import setup_logging

CommandHandler = Callable[[argparse.Namespace], int]


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tunnel-conf",
        description="Validate and translate WireGuard tunnel configurations.",
    )
    p.add_argument(
        "--settings",
        default=os.environ.get("TUNCONF_SETTINGS"),
        help="YAML settings file (env: TUNCONF_SETTINGS)",
    )
    p.add_argument("--log-level", default=None, help="Log level (env: TUNCONF_LOG_LEVEL). Default: WARNING")
    log_json = p.add_mutually_exclusive_group()
    log_json.add_argument("--log-json", dest="log_json", action="store_true", default=None, help="Log as JSON")
    log_json.add_argument("--no-log-json", dest="log_json", action="store_false")
    p.add_argument("--log-file", default=None, help="Also write logs to this file (env: TUNCONF_LOG_FILE)")

    sub = p.add_subparsers(dest="command", required=True)
    add_validate_cmd(sub)
    add_format_cmd(sub)
    add_uapi_cmd(sub)
    add_show_cmd(sub)
    add_keys_cmds(sub)
    return p


def load_settings(args: argparse.Namespace) -> Settings:
    """Defaults, then env, then the settings file, then command-line flags."""
    settings = Settings.from_env(os.environ)
    path = getattr(args, "settings", None)
    if path:
        settings = Settings.read_file(path, base=settings)
    settings.apply_args_overrides(args)
    settings.validate_or_raise()
    return settings


def main(argv: Optional[list] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args)
    except (OSError, ValueError) as e:
        print(f"Failed to load settings: {e}", file=sys.stderr)
        return 2
    setup_logging(settings.log_level, json_format=settings.log_json, log_file=settings.log_file)
    handler: Optional[CommandHandler] = getattr(args, "func", None)
    if handler is None:
        parser.error("No subcommand handler attached")
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
