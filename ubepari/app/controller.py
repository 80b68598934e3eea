"""Chat controller: grounds each assistant reply in the live catalog.

The chat endpoint must always answer. Any failure (catalog read, completion
service, parsing) is logged with its cause and replaced by FALLBACK_REPLY.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from .catalog_context import build_catalog_context
from .config import Config
from .generate import GenerationClient
from .postprocess import ImageSuggester
from .prompt_builder import PromptBuilder
from ..services.catalog import list_products
from ..utils.errors import UpstreamError
from ..utils.logger import get_logger

logger = get_logger()

FALLBACK_REPLY = (
    f"Thanks for your message! For the best assistance, please call us on 📞 {Config.STORE_PHONE} "
    "or WhatsApp us. We're open daily 9am–10pm! 😊"
)


def coerce_history(messages: Any) -> List[Dict[str, str]]:
    """Turn whatever the client sent into a list of {role, content} strings.

    A non-list becomes an empty history; non-dict turns are dropped and a
    non-string role or content becomes "user" or "".
    """
    if not isinstance(messages, list):
        return []
    history = []
    for turn in messages:
        if not isinstance(turn, dict):
            continue
        role = turn.get("role")
        content = turn.get("content")
        history.append({
            "role": role if isinstance(role, str) else "user",
            "content": content if isinstance(content, str) else "",
        })
    return history


class ChatController:
    def __init__(self, gen_client: Optional[GenerationClient] = None):
        self.gen_client = gen_client or GenerationClient()
        self.builder = PromptBuilder()
        self.images = ImageSuggester()

    def reply(self, db: Session, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Return ``{"reply": str, "images": [...]}``; never raises."""
        history = list(messages or [])
        last_message = (history[-1].get("content") or "") if history else ""
        logger.info(f"[WORKFLOW] 1. Chat request with {len(history)} turns")

        products = []
        text = None
        stage = "catalog"
        try:
            products = list_products(db)
            context = build_catalog_context(products)
            stage = "prompt"
            request_messages = self.builder.build_messages(history, context)
            stage = "completion"
            text = self.gen_client.complete(request_messages)
            if not text:
                logger.warning("[CHAT] fallback: empty completion")
        except UpstreamError as e:
            logger.warning(f"[CHAT] fallback: upstream:{e.reason} ({e})")
        except Exception as e:
            logger.exception(f"[CHAT] fallback: {stage} ({e})")

        images = []
        try:
            images = self.images.suggest(last_message, products)
        except Exception as e:
            logger.exception(f"[CHAT] image suggestion failed: {e}")

        logger.info(f"[WORKFLOW] 2. Reply ready (fallback={not text}, images={len(images)})")
        return {"reply": text or FALLBACK_REPLY, "images": images}
