import ipaddress
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

UINT16_MAX = 0xFFFF


def parse_uint(text: str, maximum: Optional[int] = UINT16_MAX) -> int:
    """Parse an unsigned decimal integer no larger than ``maximum`` (None: unbounded).

    Unlike ``int()`` this rejects signs, underscores and inner whitespace.
    """
    text = text.strip()
    if not text or not text.isascii() or not text.isdigit():
        raise ValueError(f"not an unsigned integer: {text!r}")
    value = int(text)
    if maximum is not None and value > maximum:
        raise ValueError(f"{value} exceeds {maximum}")
    return value


def parse_ip(text: str) -> IPAddress:
    return ipaddress.ip_address(text.strip())


def max_prefix_length(ip: IPAddress) -> int:
    return 32 if ip.version == 4 else 128


@dataclass(frozen=True)
class IPCidr:
    """An address with a prefix length, e.g. ``10.0.0.1/24``.

    The address keeps its host bits; this is not a network.
    """

    ip: IPAddress
    cidr: int

    @classmethod
    def parse(cls, text: str) -> "IPCidr":
        parts = text.strip().split("/")
        if len(parts) > 2:
            raise ValueError(f"invalid address range: {text!r}")
        ip = parse_ip(parts[0])
        maximum = max_prefix_length(ip)
        if len(parts) == 1:
            return cls(ip, maximum)
        # Out-of-range prefixes clamp to a host route instead of failing.
        prefix = parse_uint(parts[1], maximum=None)
        return cls(ip, min(prefix, maximum))

    def __str__(self) -> str:
        return f"{self.ip}/{self.cidr}"


@dataclass(frozen=True)
class Endpoint:
    """Where a peer is reached: a literal ``ip`` or an unresolved ``host``."""

    host: str = ""
    ip: Optional[IPAddress] = None
    port: int = 0

    @classmethod
    def parse(cls, text: str) -> "Endpoint":
        text = text.strip()
        if not text:
            raise ValueError("empty endpoint")
        # Colons inside a bracketed IPv6 literal never follow the closing bracket.
        sep = text.rfind(":")
        if sep < 0:
            raise ValueError("endpoint has no port")
        port = parse_uint(text[sep + 1:])
        if text.startswith("["):
            if sep < 2 or text[sep - 1] != "]":
                raise ValueError("Unable to find matching brace of IPv6 endpoint")
            return cls(ip=ipaddress.IPv6Address(text[1:sep - 1]), port=port)
        host = text[:sep]
        if not host:
            raise ValueError("endpoint has no host")
        try:
            return cls(ip=ipaddress.ip_address(host), port=port)
        except ValueError:
            return cls(host=host, port=port)

    @property
    def is_hostname(self) -> bool:
        return self.ip is None

    def with_ip(self, ip: IPAddress) -> "Endpoint":
        return replace(self, host="", ip=ip)

    def __str__(self) -> str:
        if self.ip is None:
            return f"{self.host}:{self.port}"
        if self.ip.version == 6:
            return f"[{self.ip}]:{self.port}"
        return f"{self.ip}:{self.port}"


_UNITS = (
    ("year", 365 * 24 * 60 * 60),
    ("day", 24 * 60 * 60),
    ("hour", 60 * 60),
    ("minute", 60),
    ("second", 1),
)


@dataclass(frozen=True)
class HandshakeTime:
    """Time of the last handshake as nanoseconds since the Unix epoch.

    Filled in from runtime statistics; zero means no handshake yet.
    """

    nanoseconds: int = 0

    def is_never(self) -> bool:
        return self.nanoseconds == 0

    def as_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.nanoseconds / 1e9, tz=timezone.utc)

    def describe(self, now: Optional[datetime] = None) -> str:
        if self.is_never():
            return "Never"
        then = self.nanoseconds // 1_000_000_000
        current = int((now or datetime.now(timezone.utc)).timestamp())
        if then == current:
            return "Now"
        if then > current:
            return "System clock wound backward!"
        left = current - then
        parts = []
        for name, size in _UNITS:
            amount, left = divmod(left, size)
            if amount > 0:
                parts.append(f"{amount} {name}" + ("" if amount == 1 else "s"))
        return ", ".join(parts) + " ago"

    def __str__(self) -> str:
        return self.describe()
