#!/usr/bin/env python3
"""
Postprocessing module for the Ubepari PC assistant.

Decides whether a reply should carry product images, based on the
customer's latest message.
"""

from typing import Any, Dict, Iterable, List

from .config import Config

# English and Swahili phrasings of "show me a picture"
IMAGE_KEYWORDS = (
    "picture", "photo", "image", "pic of", "show me",
    "picha", "nionyeshe", "onyesha", "naomba kuona",
)


def wants_images(message: str) -> bool:
    text = (message or "").lower()
    return any(keyword in text for keyword in IMAGE_KEYWORDS)


class ImageSuggester:
    """Picks product images to attach to an assistant reply."""

    def __init__(self, limit: int = Config.MAX_IMAGE_SUGGESTIONS):
        self.limit = limit

    def suggest(self, message: str, products: Iterable[Any]) -> List[Dict[str, Any]]:
        """
        Match products against the customer's message.

        Products whose first name word appears in the message win; if none
        match, every product with an image is a candidate. Only products
        with an image URL are returned, at most ``limit`` of them.
        """
        if not wants_images(message):
            return []

        text = message.lower()
        with_images = [p for p in products if p.image_url]
        matched = [p for p in with_images if self._first_word(p.name) and self._first_word(p.name) in text]
        picked = (matched or with_images)[:self.limit]
        return [{"url": p.image_url, "name": p.name, "price": p.price} for p in picked]

    @staticmethod
    def _first_word(name: str) -> str:
        words = (name or "").split()
        return words[0].lower() if words else ""
