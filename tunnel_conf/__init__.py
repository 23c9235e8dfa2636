from .errors import (
    TunnelConfError,
    ParseError,
    InvalidLineError,
    DuplicateKeyError,
    UnrecognizedKeyError,
    NoInterfaceError,
    MultipleInterfacesError,
    DuplicatePeerError,
    FieldError,
    MissingFieldError,
    InvalidFieldError,
    ResolutionError,
)
from .keys import KEY_LENGTH, Key, generate_private_key, generate_preshared_key
from .model import Config, Interface, Peer
from .parser import parse_config
from .types import Endpoint, HandshakeTime, IPCidr
from .writer import resolve_host, to_uapi, to_wg_quick

__all__ = [
    "TunnelConfError",
    "ParseError",
    "InvalidLineError",
    "DuplicateKeyError",
    "UnrecognizedKeyError",
    "NoInterfaceError",
    "MultipleInterfacesError",
    "DuplicatePeerError",
    "FieldError",
    "MissingFieldError",
    "InvalidFieldError",
    "ResolutionError",
    "KEY_LENGTH",
    "Key",
    "generate_private_key",
    "generate_preshared_key",
    "Config",
    "Interface",
    "Peer",
    "parse_config",
    "Endpoint",
    "HandshakeTime",
    "IPCidr",
    "resolve_host",
    "to_uapi",
    "to_wg_quick",
]
