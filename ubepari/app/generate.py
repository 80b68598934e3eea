#!/usr/bin/env python3
"""
Generation module for the Ubepari PC assistant.

This module calls the external completion service: an OpenAI-compatible
chat-completions endpoint (Groq by default).
"""

import requests
from typing import Dict, List, Optional

from .config import Config
from ..utils.errors import UpstreamError
from ..utils.logger import get_logger

logger = get_logger()

class GenerationClient:
    """Client for chat completions over HTTP."""

    def __init__(self, api_key: str = None, model: str = None, api_url: str = None):
        """Initialize the generation client."""
        self.api_key = api_key if api_key is not None else Config.GROQ_API_KEY
        self.llm_model = model or Config.GROQ_LLM_MODEL
        self.api_base_url = api_url or Config.GROQ_API_URL
        self.timeout = Config.COMPLETION_TIMEOUT

    def complete(self, messages: List[Dict[str, str]]) -> Optional[str]:
        """
        Generate a reply for a chat message list.

        Args:
            messages: System message followed by conversation turns

        Returns:
            The completion text, or None if the service returned no text

        Raises:
            UpstreamError: on non-2xx status, transport failure or an
                unparseable response body
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "model": self.llm_model,
            "messages": messages,
            "temperature": Config.COMPLETION_TEMPERATURE,
            "max_tokens": Config.COMPLETION_MAX_TOKENS,
        }

        try:
            logger.info(f"[WORKFLOW] Calling completion service model={self.llm_model} messages={len(messages)}")
            response = requests.post(self.api_base_url, headers=headers, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise UpstreamError("network", f"Completion request failed: {e}") from e

        if not response.ok:
            logger.error(f"[UPSTREAM] Completion service returned {response.status_code}: {response.text[:500]}")
            raise UpstreamError("http_status", f"Completion service returned {response.status_code}")

        try:
            data = response.json()
            choices = data.get("choices") or []
            if not choices:
                return None
            text = (choices[0].get("message") or {}).get("content")
        except (ValueError, AttributeError, TypeError) as e:
            raise UpstreamError("malformed", f"Error parsing completion response: {e}") from e

        return text.strip() if isinstance(text, str) and text.strip() else None
