"""
Upload policy configuration

Reads the GRAPHQL_UPLOAD dict from Django settings:

    GRAPHQL_UPLOAD = {
        'ALLOWED_TYPES': ['image/jpeg', 'image/png', 'text/plain'],
        'MAX_FILE_SIZE': 10 * 1024 * 1024,
    }
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import FrozenSet, Iterable

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


DEFAULT_ALLOWED_TYPES = ('image/jpeg', 'image/png', 'text/plain')
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
BYTES_PER_MEGABYTE = 1024 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    """Security policy applied to every uploaded file"""
    allowed_types: FrozenSet[str]
    max_file_size: int

    def __init__(self, allowed_types: Iterable[str], max_file_size: int):
        allowed = frozenset(allowed_types)
        if not allowed:
            raise ImproperlyConfigured("GRAPHQL_UPLOAD['ALLOWED_TYPES'] must not be empty")
        if isinstance(max_file_size, bool) or not isinstance(max_file_size, int) or max_file_size <= 0:
            raise ImproperlyConfigured("GRAPHQL_UPLOAD['MAX_FILE_SIZE'] must be a positive integer")

        object.__setattr__(self, 'allowed_types', allowed)
        object.__setattr__(self, 'max_file_size', max_file_size)

    @classmethod
    def from_settings(cls) -> 'UploadPolicy':
        options = getattr(settings, 'GRAPHQL_UPLOAD', {})
        return cls(
            allowed_types=options.get('ALLOWED_TYPES', DEFAULT_ALLOWED_TYPES),
            max_file_size=options.get('MAX_FILE_SIZE', DEFAULT_MAX_FILE_SIZE),
        )

    @property
    def max_file_size_mb(self) -> str:
        """Maximum size in megabytes, as a plain decimal string"""
        return format(Decimal(self.max_file_size) / Decimal(BYTES_PER_MEGABYTE), 'f')

    def describe_allowed_types(self) -> str:
        return ', '.join(sorted(self.allowed_types))
