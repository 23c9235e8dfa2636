"""Exceptions raised while reading and writing tunnel configurations."""

from typing import Optional


class TunnelConfError(Exception):
    """Base exception for all tunnel configuration errors."""
    pass


class ParseError(TunnelConfError, ValueError):
    """Raised when configuration text is structurally malformed."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class InvalidLineError(ParseError):
    def __init__(self, line: str, line_number: Optional[int] = None) -> None:
        super().__init__(f"Invalid line: '{line}'.", line_number)
        self.line = line


class DuplicateKeyError(ParseError):
    def __init__(self, key: str, line_number: Optional[int] = None) -> None:
        super().__init__(f"There should be only one entry per section for key '{key}'", line_number)
        self.key = key


class UnrecognizedKeyError(ParseError):
    def __init__(self, section: str, key: str, line_number: Optional[int] = None) -> None:
        super().__init__(f"{section} contains unrecognized key '{key}'", line_number)
        self.section = section
        self.key = key


class NoInterfaceError(ParseError):
    def __init__(self) -> None:
        super().__init__("Configuration must have an 'Interface' section.")


class MultipleInterfacesError(ParseError):
    def __init__(self, line_number: Optional[int] = None) -> None:
        super().__init__("Configuration must have only one 'Interface' section.", line_number)


class DuplicatePeerError(ParseError):
    def __init__(self, public_key: str) -> None:
        super().__init__("Two or more peers cannot have the same public key")
        self.public_key = public_key


class FieldError(ParseError):
    """Raised when a section attribute is missing or carries a bad value."""

    def __init__(self, message: str, field: str, value: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


_MISSING_MESSAGES = {
    "privatekey": "Interface's private key is required",
    "publickey": "Peer's public key is required",
}

_INVALID_MESSAGES = {
    "privatekey": "Private key is invalid.",
    "listenport": "Listen port '{}' is invalid.",
    "address": "Address '{}' is invalid.",
    "dns": "DNS '{}' is invalid.",
    "mtu": "MTU '{}' is invalid.",
    "publickey": "Public key is invalid",
    "presharedkey": "Preshared key is invalid",
    "allowedips": "Allowed IP '{}' is invalid",
    "endpoint": "Endpoint '{}' is invalid",
    "persistentkeepalive": "Persistent keepalive value '{}' is invalid",
}


class MissingFieldError(FieldError):
    def __init__(self, field: str) -> None:
        super().__init__(_MISSING_MESSAGES.get(field, f"'{field}' is required"), field)


class InvalidFieldError(FieldError):
    # Key material is never echoed back in the message.
    def __init__(self, field: str, value: str) -> None:
        template = _INVALID_MESSAGES.get(field, "Value '{}' is invalid")
        super().__init__(template.format(value), field, value)


class ResolutionError(TunnelConfError):
    """Raised when an endpoint hostname cannot be resolved to an address."""

    def __init__(self, host: str, reason: Optional[str] = None) -> None:
        message = f"Unable to resolve IP address of endpoint '{host}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.host = host
