"""
Serialization package for the G-Set library.

This package contains the encode/decode adapters that turn a GrowOnlySet
into its external form and back.
"""

from .canonical import GSetSerializer, encode_gset, decode_gset

__all__ = ['GSetSerializer', 'encode_gset', 'decode_gset']
