"""Collaborators: REST client and session tracking."""

from api.client import HttpTierListClient, Scope, TierListClient
from api.session import Session, SessionEvent, SessionManager

__all__ = [
    "HttpTierListClient",
    "Scope",
    "Session",
    "SessionEvent",
    "SessionManager",
    "TierListClient",
]
