import argparse
import sys

from ..keys import Key, generate_preshared_key, generate_private_key


def add_keys_cmds(subparsers: argparse._SubParsersAction) -> None:
    g = subparsers.add_parser("genkey", help="Generate a private key")
    g.set_defaults(func=run_genkey_cmd)
    p = subparsers.add_parser("genpsk", help="Generate a preshared key")
    p.set_defaults(func=run_genpsk_cmd)
    pub = subparsers.add_parser("pubkey", help="Read a private key on stdin and print its public key")
    pub.set_defaults(func=run_pubkey_cmd)


def run_genkey_cmd(args: argparse.Namespace) -> int:
    print(generate_private_key().to_base64())
    return 0


def run_genpsk_cmd(args: argparse.Namespace) -> int:
    print(generate_preshared_key().to_base64())
    return 0


def run_pubkey_cmd(args: argparse.Namespace) -> int:
    try:
        private = Key.from_base64(sys.stdin.read())
    except ValueError:
        print("Key is not the correct length or format", file=sys.stderr)
        return 2
    print(private.public_key().to_base64())
    return 0
