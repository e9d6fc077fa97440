"""
Service initialization for the ISH Bot relay.

STATELESS ARCHITECTURE NOTE:
----------------------------
Services are created once per process on first use and never reconfigured.
None of them keeps per-conversation state.

- llm_service: Only stores the Azure OpenAI client (shared resource)
- generation_gateway: Wraps llm_service with the fallback reply
- conversation_store: Only stores the Redis client (append-only log)
- relay_service: Pure orchestration over the two above

The session id is round-tripped by the client and never retained here, so
concurrent requests for the same session are processed independently.
"""

from .llm_service import LLMService, GenerationUnavailable, get_llm_service
from .generation_gateway import GenerationGateway, FALLBACK_REPLY, get_generation_gateway
from .conversation_store import (
    ConversationStore,
    InMemoryConversationStore,
    RedisConversationStore,
    get_conversation_store
)
from .relay_service import (
    RelayService,
    RelayValidationError,
    MISSING_FIELDS_MESSAGE,
    INVALID_SESSION_MESSAGE,
    get_relay_service
)

__all__ = [
    "LLMService",
    "GenerationUnavailable",
    "get_llm_service",
    "GenerationGateway",
    "FALLBACK_REPLY",
    "get_generation_gateway",
    "ConversationStore",
    "InMemoryConversationStore",
    "RedisConversationStore",
    "get_conversation_store",
    "RelayService",
    "RelayValidationError",
    "MISSING_FIELDS_MESSAGE",
    "INVALID_SESSION_MESSAGE",
    "get_relay_service"
]
