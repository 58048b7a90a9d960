"""Presentation helpers for profile lists"""
from .adapters import (
    CardRow,
    DiscoverGridAdapter,
    GridRow,
    ImageLoader,
    ProfileCardAdapter,
    ProfileListAdapter,
)

__all__ = [
    'CardRow',
    'DiscoverGridAdapter',
    'GridRow',
    'ImageLoader',
    'ProfileCardAdapter',
    'ProfileListAdapter',
]
