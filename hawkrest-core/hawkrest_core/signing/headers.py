"""
Header Functions
================
Formatting and parsing of the Hawk ``Authorization`` header.
"""

import re
from typing import Optional

import structlog

from ..exceptions import SigningError
from .models import HawkHeader

logger = structlog.get_logger(__name__)

SCHEME = "Hawk"

_ATTRIBUTE = re.compile(r'\s*(\w+)="([^"\\]*)"\s*(?:,|$)')
_REQUIRED = ("id", "ts", "nonce", "mac")
_KNOWN = {"id", "ts", "nonce", "mac", "hash", "ext", "app", "dlg"}


def _check_value(name: str, value: str) -> str:
    if '"' in value or "\\" in value:
        raise SigningError(f"Hawk attribute {name} contains a quote or backslash")
    return value


def format_authorization_header(header: HawkHeader) -> str:
    """
    Render ``Hawk id="..", ts="..", nonce="..", [hash="..",] [ext="..",] mac=".."``.
    """
    fields = [
        ("id", header.id),
        ("ts", str(header.ts)),
        ("nonce", header.nonce),
    ]
    if header.hash:
        fields.append(("hash", header.hash))
    if header.ext:
        fields.append(("ext", header.ext))
    fields.append(("mac", header.mac))
    attributes = ", ".join(f'{name}="{_check_value(name, value)}"' for name, value in fields)
    return f"{SCHEME} {attributes}"


def parse_authorization_header(value: str) -> Optional[HawkHeader]:
    """
    Parse a Hawk ``Authorization`` header.

    Args:
        value: Raw header value including the scheme

    Returns:
        HawkHeader if the header is well formed, None otherwise
    """
    scheme, _, rest = value.strip().partition(" ")
    if scheme.lower() != SCHEME.lower() or not rest:
        return None

    attributes = {}
    position = 0
    rest = rest.strip()
    while position < len(rest):
        match = _ATTRIBUTE.match(rest, position)
        if not match:
            logger.debug("Malformed Hawk header", position=position)
            return None
        name, attr_value = match.group(1), match.group(2)
        if name not in _KNOWN or name in attributes:
            logger.debug("Unexpected Hawk attribute", attribute=name)
            return None
        attributes[name] = attr_value
        position = match.end()

    if any(not attributes.get(name) for name in _REQUIRED):
        return None

    try:
        return HawkHeader(
            id=attributes["id"],
            ts=int(attributes["ts"]),
            nonce=attributes["nonce"],
            mac=attributes["mac"],
            hash=attributes.get("hash"),
            ext=attributes.get("ext"),
        )
    except ValueError as e:
        logger.debug("Failed to parse Hawk timestamp", error=str(e))
        return None
