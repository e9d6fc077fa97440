"""
Shared configuration
"""
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Shared configuration"""

    # Azure OpenAI (generation capability)
    AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT")
    AZURE_OPENAI_KEY = os.getenv("AZURE_OPENAI_KEY")
    AZURE_OPENAI_API_VERSION = os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-15-preview")
    AZURE_OPENAI_DEPLOYMENT_NAME = os.getenv("AZURE_OPENAI_DEPLOYMENT_NAME", "gpt-4o")
    GENERATION_TIMEOUT_SECONDS = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "30"))

    # Redis (chat history)
    REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_PASSWORD = os.getenv("REDIS_PASSWORD") or None
    CHAT_HISTORY_KEY = os.getenv("CHAT_HISTORY_KEY", "chat_history")

    # API server
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "5000"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Client
    RELAY_BASE_URL = os.getenv("RELAY_BASE_URL", "http://localhost:5000")
    RELAY_TIMEOUT_SECONDS = float(os.getenv("RELAY_TIMEOUT_SECONDS", "30"))

    @classmethod
    def missing_generation_settings(cls) -> List[str]:
        """
        Names of required generation variables that are not set.

        Returns:
            List of missing environment variable names
        """
        required = {
            "AZURE_OPENAI_ENDPOINT": cls.AZURE_OPENAI_ENDPOINT,
            "AZURE_OPENAI_KEY": cls.AZURE_OPENAI_KEY,
        }
        return [name for name, value in required.items() if not value]
