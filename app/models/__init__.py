"""Domain models for the application"""
from .profile import DEFAULT_BIO, DEFAULT_LOCATION, Profile

__all__ = [
    "Profile",
    "DEFAULT_BIO",
    "DEFAULT_LOCATION",
]
