"""
LLM Service - Handles all Azure OpenAI interactions
"""
from typing import Optional
from openai import AzureOpenAI

from ish_bot.config import Config
from ish_bot.logging_config import get_logger

logger = get_logger("ish-llm")


class GenerationUnavailable(RuntimeError):
    """Raised when the generation client is not configured or returns nothing usable"""


class LLMService:
    """Service for interacting with Azure OpenAI"""

    def __init__(self):
        self.client: Optional[AzureOpenAI] = None
        self.deployment_name: Optional[str] = Config.AZURE_OPENAI_DEPLOYMENT_NAME
        self._initialize_client()

    def _initialize_client(self) -> None:
        """Initialize the Azure OpenAI client. Leaves the client unset when misconfigured."""
        missing = Config.missing_generation_settings()
        if missing:
            logger.warning("llm_client_not_configured", missing=missing)
            return

        try:
            # The gateway calls the model exactly once per request
            self.client = AzureOpenAI(
                azure_endpoint=Config.AZURE_OPENAI_ENDPOINT,
                api_key=Config.AZURE_OPENAI_KEY,
                api_version=Config.AZURE_OPENAI_API_VERSION,
                timeout=Config.GENERATION_TIMEOUT_SECONDS,
                max_retries=0
            )
            logger.info("llm_client_initialized", deployment=self.deployment_name)
        except Exception as e:
            logger.error("llm_client_initialization_failed", error=str(e))
            self.client = None

    def get_completion(self, prompt: str, temperature: float = 0.7, max_tokens: int = 500) -> str:
        """
        Get a completion for a fully composed prompt.

        Args:
            prompt: The composed system instruction and user message
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens in response

        Returns:
            The LLM's response content

        Raises:
            GenerationUnavailable: If the client is missing or the reply is empty
            Exception: If the API call fails
        """
        if self.client is None:
            raise GenerationUnavailable("Azure OpenAI client is not configured")

        response = self.client.chat.completions.create(
            model=self.deployment_name,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens
        )
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise GenerationUnavailable(f"Malformed completion response: {e}") from e

        if not content or not content.strip():
            raise GenerationUnavailable("Completion response was empty")

        logger.info("llm_response_received", length=len(content))
        return content.strip()

    def is_healthy(self) -> bool:
        """Check if the LLM service is properly configured"""
        return self.client is not None and self.deployment_name is not None


# Singleton instance
_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """Get or create the LLM service singleton"""
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
    return _llm_service
