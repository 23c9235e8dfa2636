from dataclasses import dataclass, field
from typing import List, Optional

from .keys import Key
from .types import Endpoint, HandshakeTime, IPAddress, IPCidr


@dataclass()
class Interface:
    private_key: Key
    addresses: List[IPCidr] = field(default_factory=list)
    # 0 means unset for both
    listen_port: int = 0
    mtu: int = 0
    dns: List[IPAddress] = field(default_factory=list)


@dataclass()
class Peer:
    public_key: Key
    preshared_key: Key = field(default_factory=Key.zero)
    allowed_ips: List[IPCidr] = field(default_factory=list)
    endpoint: Optional[Endpoint] = None
    persistent_keepalive: int = 0

    # Runtime statistics, supplied by whoever talks to the tunnel runtime.
    rx_bytes: int = 0
    tx_bytes: int = 0
    last_handshake_time: HandshakeTime = field(default_factory=HandshakeTime)


@dataclass()
class Config:
    """A tunnel: one interface and its peers, in file order."""

    name: str
    interface: Interface
    peers: List[Peer] = field(default_factory=list)

    def find_peer(self, public_key: Key) -> Optional[Peer]:
        for peer in self.peers:
            if peer.public_key == public_key:
                return peer
        return None
