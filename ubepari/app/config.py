#!/usr/bin/env python3
"""
Configuration management for the Ubepari PC backend.

Every value has a hardcoded fallback so the service boots without a .env
file; a real deployment must override the secrets.
"""

import os
from dotenv import load_dotenv

from ..utils.logger import get_logger

# Load environment variables from .env file
load_dotenv()

logger = get_logger()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    """Configuration class for the application."""

    # Store
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ubepari.db")

    # Admin auth
    JWT_SECRET = os.getenv("JWT_SECRET", "ubepari_secret_2024")
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_DAYS = 7
    ADMIN_USER = os.getenv("ADMIN_USER", "ubepari_pc")
    ADMIN_PASS = os.getenv("ADMIN_PASS", "Ubepari@2024!")

    # HTTP
    PORT = int(os.getenv("PORT", 3000))
    ENVIRONMENT = os.getenv("ENVIRONMENT", "Production")

    # Groq API Configuration (OpenAI-compatible chat completions)
    GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
    GROQ_LLM_MODEL = os.getenv("GROQ_LLM_MODEL", "llama-3.1-8b-instant")
    GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
    COMPLETION_TIMEOUT = int(os.getenv("COMPLETION_TIMEOUT", 30))
    COMPLETION_TEMPERATURE = 0.4
    COMPLETION_MAX_TOKENS = 400

    # Orders
    ORDER_STATUS_STRICT = _env_flag("ORDER_STATUS_STRICT")
    DEFAULT_PAYMENT_METHOD = "After Delivery"

    # Keep-alive self ping
    KEEPALIVE_URL = os.getenv("KEEPALIVE_URL", "")
    KEEPALIVE_INTERVAL = int(os.getenv("KEEPALIVE_INTERVAL", 600))

    # Assistant
    MAX_CONVERSATION_TURNS = 6
    MAX_IMAGE_SUGGESTIONS = 3
    CURRENCY = "TZS"
    STORE_PHONE = "0619066079"

    @classmethod
    def debug_print(cls):
        logger.info(f"[CONFIG] ENVIRONMENT={cls.ENVIRONMENT} PORT={cls.PORT}")
        logger.info(f"[CONFIG] DATABASE_URL set={bool(os.getenv('DATABASE_URL'))}")
        logger.info(f"[CONFIG] GROQ_MODEL={cls.GROQ_LLM_MODEL} set={bool(cls.GROQ_API_KEY)}")
        logger.info(f"[CONFIG] ORDER_STATUS_STRICT={cls.ORDER_STATUS_STRICT}")
        logger.info(f"[CONFIG] KEEPALIVE={'on' if cls.KEEPALIVE_URL else 'off'} every {cls.KEEPALIVE_INTERVAL}s")
