"""
Chat client: session registry, send controller and relay transport
"""

from .relay_client import RelayClient, NetworkFailure
from .session_registry import (
    Session,
    SessionRegistry,
    SUPPORTED_LANGUAGES,
    WELCOME_MESSAGES,
    welcome_message
)
from .chat_controller import ChatController, CONNECTION_FALLBACK, EMPTY_REPLY_FALLBACK

__all__ = [
    "RelayClient",
    "NetworkFailure",
    "Session",
    "SessionRegistry",
    "SUPPORTED_LANGUAGES",
    "WELCOME_MESSAGES",
    "welcome_message",
    "ChatController",
    "CONNECTION_FALLBACK",
    "EMPTY_REPLY_FALLBACK"
]
