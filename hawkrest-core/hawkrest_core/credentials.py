"""
Credentials
===========
Client id / access token pair used to sign requests.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .exceptions import ConfigurationError


def mask_token(token: str) -> str:
    """
    Mask an access token for safe display.

    Args:
        token: Full access token

    Returns:
        Masked token (e.g., "abcd****")
    """
    if len(token) > 8:
        return token[:4] + "****"
    return "****"


@dataclass(frozen=True)
class Credentials:
    """
    Immutable Hawk credentials.

    ``certificate`` is only set for temporary credentials; it is carried in
    the ``ext`` field of every signed request.
    """
    client_id: str
    access_token: str = field(repr=False)
    certificate: Optional[Union[str, Dict[str, Any]]] = field(default=None, repr=False)

    def __post_init__(self):
        if not self.client_id:
            raise ConfigurationError("Credentials require a client id")
        if not self.access_token:
            raise ConfigurationError("Credentials require an access token")

    @property
    def id(self) -> str:
        return self.client_id

    @property
    def key(self) -> bytes:
        return self.access_token.encode("utf-8")

    def certificate_object(self) -> Optional[Dict[str, Any]]:
        """Return the certificate as a dict, parsing it if given as JSON text."""
        if self.certificate is None:
            return None
        if isinstance(self.certificate, str):
            try:
                return json.loads(self.certificate)
            except ValueError as e:
                raise ConfigurationError(f"Certificate for {self.client_id} is not valid JSON: {e}")
        return dict(self.certificate)

    def masked_token(self) -> str:
        return mask_token(self.access_token)

    def __str__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, access_token={self.masked_token()!r})"
