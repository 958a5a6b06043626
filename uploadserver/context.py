"""
Context passed to GraphQL resolvers
"""
from dataclasses import dataclass
from typing import Any, Optional

from django.http import HttpRequest


@dataclass
class UploadContext:
    request: HttpRequest
    response: Optional[Any] = None
    ip: str = ''


def get_client_ip(request: HttpRequest) -> str:
    """
    Client IP address, preferring the first X-Forwarded-For hop
    """
    forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if forwarded_for:
        return forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', '')
