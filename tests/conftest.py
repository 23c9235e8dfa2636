import sys
from pathlib import Path

import pytest
import structlog

# Ensure the package root is importable when running tests without install
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def captured_logs():
    # Keeps log output off stdout and lets tests assert on events.
    with structlog.testing.capture_logs() as logs:
        yield logs


SAMPLE_CONF = """
[Interface]
Address = 10.192.122.1/24
Address = 10.10.0.1/16
PrivateKey = yAnz5TF+lXXJte14tji3zlMNq+hd2rYUIgJBgB3fBmk=
ListenPort = 51820

[Peer]
PublicKey   =   xTIBA5rboUvnH4htodjb6e697QjLERt1NAB4mZqp8Dg=
Endpoint = 192.95.5.67:1234
AllowedIPs = 10.192.122.3/32, 10.192.124.1/24

[Peer]
PublicKey = TrMvSoP4jYQlY6RIzBgbssQqY3vxI2Pi+y71lOWWXX0=
Endpoint = [2607:5300:60:6b0::c05f:543]:2468
AllowedIPs = 10.192.122.4/32, 192.168.0.0/16
PersistentKeepalive = 100

[Peer]
PublicKey = gN65BkIKy1eCE9pP1wdc8ROUtkHLF2PfAqYdyYBz6EA=
PresharedKey = TrMvSoP4jYQlY6RIzBgbssQqY3vxI2Pi+y71lOWWXX0=
Endpoint = test.example.com:18981
AllowedIPs = 10.10.10.230/32"""


@pytest.fixture()
def sample_conf() -> str:
    return SAMPLE_CONF


@pytest.fixture()
def sample_path(tmp_path) -> str:
    p = tmp_path / "wg0.conf"
    p.write_text(SAMPLE_CONF, encoding="utf-8")
    return str(p)
