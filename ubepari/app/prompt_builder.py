#!/usr/bin/env python3
"""
Prompt builder module for the Ubepari PC assistant.

This module builds the chat-completion message list: a fixed system prompt
carrying store policy and the live catalog, followed by the most recent
conversation turns.
"""

from typing import Any, Dict, List

from .catalog_context import CatalogContext
from .config import Config
from ..utils.logger import get_logger

logger = get_logger()

class PromptBuilder:
    """Builds the message list sent to the completion service."""

    def __init__(self, max_turns: int = Config.MAX_CONVERSATION_TURNS):
        """Initialize the prompt builder."""
        self.max_turns = max_turns
        self.system_prompt = """You are the customer assistant for Ubepari PC, a computer and electronics shop in Tanzania.

STORE INFORMATION:
- Location: Magomeni Mapipa, Dar es Salaam
- Open daily 9am–10pm
- Phone / WhatsApp: {phone}
- FREE delivery to all 26 Tanzania regions
- Payment is AFTER delivery: Cash, Credit/Debit Cards, Mobile Money (M-Pesa, Airtel, Tigo, Halopesa) and Cheques. No upfront payment.
- All products carry manufacturer warranty. We offer PC assembly and setup services.
- We accept old electronics for recycling at the store.

PRODUCTS IN STOCK (name | brand | price | stock | description):
{in_stock}

OUT OF STOCK (can be ordered in, ask the customer to call):
{out_of_stock}

LANGUAGE RULE (STRICT):
- Reply ONLY in the language of the customer's LAST message.
- If the last message is in Swahili, reply entirely in Swahili. If it is in English, reply entirely in English.
- Never mix English and Swahili in one reply.

RESPONSE RULES:
- Be short: at most 5 lines or 5 bullets.
- Only recommend products from the lists above, with the exact price shown. Never invent products, prices or stock.
- If a product is out of stock, say so and suggest an in-stock alternative.
- To list products use exactly: • Name — TZS price
- For anything you cannot answer, ask the customer to call {phone}."""

    def build_system_prompt(self, context: CatalogContext) -> str:
        return self.system_prompt.format(
            phone=Config.STORE_PHONE,
            in_stock=context.in_stock,
            out_of_stock=context.out_of_stock,
        )

    def build_messages(self, history: List[Dict[str, Any]], context: CatalogContext) -> List[Dict[str, str]]:
        """
        Build the completion request messages.

        Args:
            history: Conversation turns, oldest first, as {role, content}
            context: Catalog listings for this call

        Returns:
            System message followed by at most ``max_turns`` recent turns
        """
        recent = list(history or [])[-self.max_turns:]
        messages = [{"role": "system", "content": self.build_system_prompt(context)}]
        for turn in recent:
            role = turn.get("role") if turn.get("role") in ("user", "assistant") else "user"
            messages.append({"role": role, "content": turn.get("content") or ""})
        logger.info(f"[WORKFLOW] Prompt built: {len(history or [])} turns received, {len(recent)} sent")
        return messages
