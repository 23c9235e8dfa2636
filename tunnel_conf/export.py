from datetime import datetime
from typing import Any, Dict, List, Optional

import yaml  # type: ignore

from .model import Config, Peer


def to_yaml_dict(cfg: Config, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Inspection view of a tunnel. Secret key material is left out."""
    iface = cfg.interface
    iface_map: Dict[str, Any] = {
        "public-key": iface.private_key.public_key().to_base64(),
    }
    if iface.listen_port > 0:
        iface_map["listen-port"] = iface.listen_port
    if iface.mtu > 0:
        iface_map["mtu"] = iface.mtu
    if iface.addresses:
        iface_map["addresses"] = [str(a) for a in iface.addresses]
    if iface.dns:
        iface_map["dns"] = [str(d) for d in iface.dns]

    peers: List[Dict[str, Any]] = [_peer_dict(p, now) for p in cfg.peers]
    return {
        "name": cfg.name,
        "interface": iface_map,
        "peers": peers,
    }


def _peer_dict(peer: Peer, now: Optional[datetime]) -> Dict[str, Any]:
    item: Dict[str, Any] = {
        "public-key": peer.public_key.to_base64(),
        "preshared-key": not peer.preshared_key.is_zero(),
    }
    if peer.allowed_ips:
        item["allowed-ips"] = [str(a) for a in peer.allowed_ips]
    if peer.endpoint is not None:
        item["endpoint"] = str(peer.endpoint)
    if peer.persistent_keepalive > 0:
        item["persistent-keepalive"] = peer.persistent_keepalive
    item["rx-bytes"] = peer.rx_bytes
    item["tx-bytes"] = peer.tx_bytes
    item["latest-handshake"] = peer.last_handshake_time.describe(now)
    return item


def dump_yaml(data: Dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
