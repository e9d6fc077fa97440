"""
Generation Gateway - turns any generation failure into a fixed fallback reply
"""
from typing import Optional

from ish_bot.logging_config import get_logger
from ish_bot.services.llm_service import LLMService, get_llm_service

logger = get_logger("ish-generation")

FALLBACK_REPLY = "I'm having trouble connecting right now. Please try again or contact a health worker."


class GenerationGateway:
    """Calls the LLM once per prompt and never raises to its caller"""

    def __init__(self, llm_service: LLMService):
        self.llm_service = llm_service

    def generate(self, prompt: str) -> str:
        """
        Generate a reply for the composed prompt.

        Returns:
            The model reply, or FALLBACK_REPLY if the call failed for any reason
        """
        try:
            return self.llm_service.get_completion(prompt)
        except Exception as e:
            logger.error("generation_failed", error_type=type(e).__name__, error=str(e))
            return FALLBACK_REPLY


# Singleton instance
_generation_gateway: Optional[GenerationGateway] = None


def get_generation_gateway() -> GenerationGateway:
    """Get or create the generation gateway singleton"""
    global _generation_gateway
    if _generation_gateway is None:
        _generation_gateway = GenerationGateway(get_llm_service())
    return _generation_gateway
