"""Render a :class:`Config` as wg-quick text or as a control-protocol stream."""

import ipaddress
import socket
from typing import Callable, Iterable, List, Optional, Sequence

from .errors import ResolutionError
from .logging import get_logger
from .model import Config
from .types import Endpoint, IPAddress

logger = get_logger(__name__)

Resolver = Callable[[str], Sequence[IPAddress]]


def _join(items: Iterable[object]) -> str:
    return ", ".join(str(item) for item in items)


def to_wg_quick(config: Config) -> str:
    """Render ``config`` in the human-editable format read by ``parse_config``."""
    iface = config.interface
    lines: List[str] = []

    lines.append("[Interface]\n")
    lines.append(f"PrivateKey = {iface.private_key}\n")
    if iface.listen_port > 0:
        lines.append(f"ListenPort = {iface.listen_port}\n")
    if iface.addresses:
        lines.append(f"Address = {_join(iface.addresses)}\n")
    if iface.dns:
        lines.append(f"DNS = {_join(iface.dns)}\n")
    if iface.mtu > 0:
        lines.append(f"MTU = {iface.mtu}\n")

    for peer in config.peers:
        lines.append("\n[Peer]\n")
        lines.append(f"PublicKey = {peer.public_key}\n")
        if not peer.preshared_key.is_zero():
            lines.append(f"PresharedKey = {peer.preshared_key}\n")
        if peer.allowed_ips:
            lines.append(f"AllowedIPs = {_join(peer.allowed_ips)}\n")
        if peer.endpoint is not None:
            lines.append(f"Endpoint = {peer.endpoint}\n")
        if peer.persistent_keepalive > 0:
            lines.append(f"PersistentKeepalive = {peer.persistent_keepalive}\n")

    return "".join(lines)


def resolve_host(host: str) -> List[IPAddress]:
    """Look ``host`` up with the system resolver. Blocks; no timeout of its own."""
    try:
        infos = socket.getaddrinfo(host, None, proto=socket.IPPROTO_UDP)
    # Hostnames the idna codec rejects (empty or over-long labels) raise UnicodeError.
    except (OSError, UnicodeError) as e:
        raise ResolutionError(host, str(e)) from e
    addresses: List[IPAddress] = []
    for _family, _type, _proto, _canon, sockaddr in infos:
        # Drop any IPv6 scope suffix before parsing.
        ip = ipaddress.ip_address(str(sockaddr[0]).split("%", 1)[0])
        if ip not in addresses:
            addresses.append(ip)
    return addresses


def pick_address(host: str, candidates: Sequence[IPAddress]) -> IPAddress:
    """Prefer the first IPv4 answer, else take the first answer."""
    if not candidates:
        raise ResolutionError(host)
    for ip in candidates:
        if ip.version == 4:
            return ip
    return candidates[0]


def resolve_endpoint(endpoint: Endpoint, resolver: Optional[Resolver] = None) -> Endpoint:
    if not endpoint.is_hostname:
        return endpoint
    try:
        candidates = (resolver or resolve_host)(endpoint.host)
    except ResolutionError:
        logger.warning("Endpoint resolution failed", host=endpoint.host)
        raise
    except (OSError, ValueError) as e:
        logger.warning("Endpoint resolution failed", host=endpoint.host, error=str(e))
        raise ResolutionError(endpoint.host, str(e)) from e
    ip = pick_address(endpoint.host, candidates)
    logger.debug("Resolved endpoint", host=endpoint.host, ip=str(ip))
    return endpoint.with_ip(ip)


def to_uapi(config: Config, resolver: Optional[Resolver] = None) -> str:
    """Render ``config`` as a control-protocol ``key=value`` stream.

    The output always replaces the runtime's peers and each peer's allowed
    IPs rather than merging with them. Hostname endpoints are resolved
    through ``resolver``, the system resolver by default; if any cannot be
    resolved a :class:`~tunnel_conf.errors.ResolutionError` is raised and
    nothing is returned.
    """
    iface = config.interface
    lines: List[str] = []

    lines.append(f"private_key={iface.private_key.to_hex()}\n")
    if iface.listen_port > 0:
        lines.append(f"listen_port={iface.listen_port}\n")
    if config.peers:
        lines.append("replace_peers=true\n")

    for peer in config.peers:
        lines.append(f"public_key={peer.public_key.to_hex()}\n")
        if not peer.preshared_key.is_zero():
            lines.append(f"preshared_key={peer.preshared_key.to_hex()}\n")
        if peer.endpoint is not None:
            lines.append(f"endpoint={resolve_endpoint(peer.endpoint, resolver)}\n")
        # Zero disables keepalive; always written.
        lines.append(f"persistent_keepalive_interval={peer.persistent_keepalive}\n")
        if peer.allowed_ips:
            lines.append("replace_allowed_ips=true\n")
            for allowed_ip in peer.allowed_ips:
                lines.append(f"allowed_ip={allowed_ip}\n")

    return "".join(lines)
