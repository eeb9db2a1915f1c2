"""Utility modules for the Dapr HTTP client."""

from .sanitizer import (
    is_sensitive_key,
    mask_sensitive_data,
    mask_url,
    mask_headers,
)

__all__ = [
    'is_sensitive_key',
    'mask_sensitive_data',
    'mask_url',
    'mask_headers',
]
