"""Parse wg-quick style tunnel configuration text into a :class:`Config`.

Parsing happens in two steps. A line-oriented state machine collects each
``[Interface]`` / ``[Peer]`` section into a mapping of lower-cased key to raw
value; when the section ends the mapping is handed to a collator that builds
the matching model object with strict validation. Any error aborts the whole
parse.
"""

import enum
from typing import Callable, Dict, List, Mapping, Optional, TypeVar

from .errors import (
    DuplicateKeyError,
    DuplicatePeerError,
    InvalidFieldError,
    InvalidLineError,
    MissingFieldError,
    MultipleInterfacesError,
    NoInterfaceError,
    UnrecognizedKeyError,
)
from .keys import Key
from .logging import get_logger
from .model import Config, Interface, Peer
from .types import Endpoint, IPCidr, parse_ip, parse_uint

logger = get_logger(__name__)

T = TypeVar("T")

Attributes = Dict[str, str]


class ParserState(enum.Enum):
    NO_SECTION = "none"
    IN_INTERFACE = "Interface"
    IN_PEER = "Peer"


INTERFACE_KEYS = frozenset({"privatekey", "listenport", "address", "dns", "mtu"})
PEER_KEYS = frozenset({"publickey", "presharedkey", "allowedips", "endpoint", "persistentkeepalive"})
# These may repeat within a section; values are joined as one list.
CUMULATIVE_KEYS = frozenset({"address", "allowedips", "dns"})

_HEADERS = {
    "[interface]": ParserState.IN_INTERFACE,
    "[peer]": ParserState.IN_PEER,
}


def parse_config(text: str, name: str = "") -> Config:
    """Parse configuration ``text`` into a validated :class:`Config`.

    Raises a :class:`~tunnel_conf.errors.ParseError` subclass on the first
    problem found.
    """
    state = ParserState.NO_SECTION
    attributes: Attributes = {}
    interface: Optional[Interface] = None
    peers: List[Peer] = []
    seen_keys: List[Key] = []

    def flush(section_line: int) -> None:
        nonlocal interface
        if state is ParserState.IN_INTERFACE:
            if interface is not None:
                raise MultipleInterfacesError(section_line)
            interface = collate_interface(attributes)
        elif state is ParserState.IN_PEER:
            peer = collate_peer(attributes)
            # Key.__eq__ is constant time; a set would hash key material.
            if any(peer.public_key == seen for seen in seen_keys):
                raise DuplicatePeerError(peer.public_key.to_base64())
            seen_keys.append(peer.public_key)
            peers.append(peer)

    section_line = 0
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue

        header = _HEADERS.get(line.lower())
        if header is not None:
            flush(section_line)
            state = header
            section_line = line_number
            attributes = {}
            continue

        key, sep, value = line.partition("=")
        key = key.strip().lower()
        if not sep or not key or state is ParserState.NO_SECTION:
            raise InvalidLineError(raw, line_number)
        _add_attribute(attributes, state, key, value.strip(), line_number)

    flush(section_line)

    if interface is None:
        raise NoInterfaceError()

    logger.debug("Parsed tunnel configuration", tunnel=name, peers=len(peers))
    return Config(name=name, interface=interface, peers=peers)


def _add_attribute(
    attributes: Attributes, state: ParserState, key: str, value: str, line_number: int
) -> None:
    allowed = INTERFACE_KEYS if state is ParserState.IN_INTERFACE else PEER_KEYS
    if key not in allowed:
        raise UnrecognizedKeyError(state.value, key, line_number)
    if key in attributes:
        if key not in CUMULATIVE_KEYS:
            raise DuplicateKeyError(key, line_number)
        attributes[key] = f"{attributes[key]}, {value}"
    else:
        attributes[key] = value


def collate_interface(attributes: Mapping[str, str]) -> Interface:
    """Build an :class:`Interface` from one section's attributes."""
    interface = Interface(private_key=_required_key(attributes, "privatekey"))
    if "listenport" in attributes:
        interface.listen_port = _field(attributes, "listenport", parse_uint)
    if "mtu" in attributes:
        interface.mtu = _field(attributes, "mtu", parse_uint)
    if "address" in attributes:
        interface.addresses = _field_list(attributes, "address", IPCidr.parse)
    if "dns" in attributes:
        interface.dns = _field_list(attributes, "dns", parse_ip)
    return interface


def collate_peer(attributes: Mapping[str, str]) -> Peer:
    """Build a :class:`Peer` from one section's attributes."""
    peer = Peer(public_key=_required_key(attributes, "publickey"))
    if "presharedkey" in attributes:
        peer.preshared_key = _field(attributes, "presharedkey", Key.from_base64)
    if "allowedips" in attributes:
        peer.allowed_ips = _field_list(attributes, "allowedips", IPCidr.parse)
    if "endpoint" in attributes:
        peer.endpoint = _field(attributes, "endpoint", Endpoint.parse)
    if "persistentkeepalive" in attributes:
        peer.persistent_keepalive = _field(attributes, "persistentkeepalive", parse_uint)
    return peer


def _required_key(attributes: Mapping[str, str], name: str) -> Key:
    if name not in attributes:
        raise MissingFieldError(name)
    return _field(attributes, name, Key.from_base64)


def _field(attributes: Mapping[str, str], name: str, parse: Callable[[str], T]) -> T:
    value = attributes[name]
    try:
        return parse(value)
    except ValueError as e:
        raise InvalidFieldError(name, value) from e


def _field_list(attributes: Mapping[str, str], name: str, parse: Callable[[str], T]) -> List[T]:
    # A single bad element rejects the whole list.
    items: List[T] = []
    for element in attributes[name].split(","):
        element = element.strip()
        try:
            if not element:
                raise ValueError("empty list element")
            items.append(parse(element))
        except ValueError as e:
            raise InvalidFieldError(name, element) from e
    return items