"""
Request Composition
===================
URL and body composition for service requests.
"""

from .models import ComposedRequest, RequestDescriptor, QueryPairs
from .composer import compose, compose_url, serialize_body, JSON_CONTENT_TYPE

__all__ = [
    # Models
    "ComposedRequest",
    "RequestDescriptor",
    "QueryPairs",
    # Composer
    "compose",
    "compose_url",
    "serialize_body",
    "JSON_CONTENT_TYPE",
]
