"""Assistant chat backed by the generation provider."""
from typing import Dict, List, Optional
import logging

from finnolan.domain.exceptions import InputValidationError
from finnolan.domain.interfaces import TextGenerator

logger = logging.getLogger(__name__)

MAX_TURNS = 20
ROLES = {"user", "assistant"}

SYSTEM_PROMPT = (
    "You are FINNOLAN, an AI financial assistant. Answer questions about companies, "
    "markets and financial topics clearly and concisely. You do not give personalised "
    "investment advice; remind users to do their own research where relevant."
)


class ChatService:
    def __init__(self, generator: TextGenerator, model: Optional[str] = None):
        self._generator = generator
        self._model = model

    async def reply(self, messages: List[Dict[str, str]]) -> str:
        turns = [
            {"role": m["role"], "content": m["content"].strip()}
            for m in messages
            if m.get("role") in ROLES and (m.get("content") or "").strip()
        ]
        if not turns or turns[-1]["role"] != "user":
            raise InputValidationError("A non-empty user message is required")

        turns = turns[-MAX_TURNS:]
        logger.info(f"Chat request with {len(turns)} turns")
        reply = await self._generator.complete(
            [{"role": "system", "content": SYSTEM_PROMPT}, *turns], model=self._model
        )
        return reply.strip()
