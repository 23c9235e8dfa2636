import ipaddress
from datetime import datetime, timezone

import pytest

from tunnel_conf import Endpoint, HandshakeTime, IPCidr, Key
from tunnel_conf.keys import generate_preshared_key, generate_private_key
from tunnel_conf.types import parse_uint

RANGE_KEY_B64 = "AAECAwQFBgcICQoLDA0ODxAREhMUFRYXGBkaGxwdHh8="


# Keys
def test_key_base64_and_hex_encodings():
    k = Key.from_base64(RANGE_KEY_B64)
    assert bytes(k) == bytes(range(32))
    assert k.to_hex() == bytes(range(32)).hex()
    assert str(k) == RANGE_KEY_B64
    assert Key.from_hex(k.to_hex()) == k


@pytest.mark.parametrize("text", ["not a key!", "AAAAAAAAAAAAAAAAAAAAAA==", ""])
def test_key_rejects_bad_encoding_or_length(text):
    with pytest.raises(ValueError):
        Key.from_base64(text)


def test_key_zero_and_equality():
    assert Key.zero().is_zero()
    assert not Key.from_base64(RANGE_KEY_B64).is_zero()
    assert Key.zero() == Key(bytes(32))
    assert Key.zero() != Key.from_base64(RANGE_KEY_B64)
    assert len({Key.zero(), Key(bytes(32))}) == 1


def test_key_repr_hides_material():
    k = Key.from_base64(RANGE_KEY_B64)
    assert RANGE_KEY_B64 not in repr(k)
    assert "redacted" in repr(k)


def test_public_key_derivation_matches_rfc7748_vector():
    private = Key.from_hex("77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a")
    assert private.public_key().to_hex() == "8520f0098930a754748b7ddcb43ef75a0dbf3a0d26381af4eba4a98eaa9b4e6a"


def test_generated_keys_are_32_bytes_and_distinct():
    a, b = generate_private_key(), generate_private_key()
    assert len(bytes(a)) == 32 and a != b
    assert len(bytes(generate_preshared_key())) == 32


# Numbers
@pytest.mark.parametrize("text", ["-1", "+5", "1_000", "abc", "", "65536", "٣"])
def test_parse_uint_rejects(text):
    with pytest.raises(ValueError):
        parse_uint(text)


def test_parse_uint_accepts_bounds():
    assert parse_uint("0") == 0
    assert parse_uint(" 65535 ") == 65535


# Address ranges
def test_ipcidr_prefix_clamping():
    assert IPCidr.parse("10.0.0.1/99").cidr == 32
    assert IPCidr.parse("10.0.0.1").cidr == 32
    assert IPCidr.parse("::1/200").cidr == 128
    assert IPCidr.parse("::1").cidr == 128


def test_ipcidr_keeps_host_bits():
    r = IPCidr.parse(" 10.10.10.230/24 ")
    assert r.ip == ipaddress.IPv4Address("10.10.10.230")
    assert r.cidr == 24
    assert str(r) == "10.10.10.230/24"


@pytest.mark.parametrize("text", ["bogus/24", "10.0.0.1/x", "10.0.0.1/", "10.0.0.1/24/1", ""])
def test_ipcidr_rejects_invalid(text):
    with pytest.raises(ValueError):
        IPCidr.parse(text)


# Endpoints
def test_endpoint_literal_ipv4():
    e = Endpoint.parse("192.168.42.0:51880")
    assert e.ip == ipaddress.IPv4Address("192.168.42.0")
    assert e.host == ""
    assert e.port == 51880
    assert not e.is_hostname


def test_endpoint_hostname():
    e = Endpoint.parse("test.example.com:18981")
    assert e.ip is None
    assert e.host == "test.example.com"
    assert e.port == 18981
    assert e.is_hostname
    assert str(e) == "test.example.com:18981"


def test_endpoint_bracketed_ipv6():
    e = Endpoint.parse("[2607:5300:60:6b0::c05f:543]:2468")
    assert e.ip == ipaddress.IPv6Address("2607:5300:60:6b0::c05f:543")
    assert e.port == 2468
    assert str(e) == "[2607:5300:60:6b0::c05f:543]:2468"


@pytest.mark.parametrize(
    "text",
    ["", "example.com", ":51820", "example.com:99999", "example.com:port", "[::1:51820", "[not-ipv6]:1", "[10.0.0.1]:1"],
)
def test_endpoint_rejects_invalid(text):
    with pytest.raises(ValueError):
        Endpoint.parse(text)


def test_endpoint_with_ip_drops_hostname():
    e = Endpoint.parse("vpn.example.com:51820").with_ip(ipaddress.ip_address("2001:db8::1"))
    assert str(e) == "[2001:db8::1]:51820"


# Handshake times
NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _ago(seconds: int) -> HandshakeTime:
    return HandshakeTime((int(NOW.timestamp()) - seconds) * 1_000_000_000)


def test_handshake_describe():
    assert HandshakeTime().describe(NOW) == "Never"
    assert _ago(0).describe(NOW) == "Now"
    assert _ago(-10).describe(NOW) == "System clock wound backward!"
    assert _ago(3661).describe(NOW) == "1 hour, 1 minute, 1 second ago"
    assert _ago(2 * 86400 + 5).describe(NOW) == "2 days, 5 seconds ago"
    assert _ago(365 * 86400).describe(NOW) == "1 year ago"


def test_handshake_as_datetime():
    assert _ago(60).as_datetime() == datetime(2023, 12, 31, 23, 59, tzinfo=timezone.utc)
