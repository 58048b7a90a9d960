"""Supabase infrastructure module"""
from .client import StoreHandle
from .session import AuthSession, BearerSession, SessionSource

__all__ = ['StoreHandle', 'AuthSession', 'BearerSession', 'SessionSource']
