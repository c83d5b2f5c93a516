import asyncio
import logging
from typing import Any

import litellm

from lingopal.config.settings import get_settings
from lingopal.middleware.error_handlers import ExternalServiceError

from .prompts import TUTOR_SYSTEM_PROMPTS
from .schemas import ChatMessage


logger = logging.getLogger(__name__)

litellm.drop_params = True


class ChatClient:
    """Sends tutor conversations to the configured chat-completion model."""

    def __init__(self, model: str | None = None) -> None:
        self.model = model or get_settings().CHAT_MODEL

    def build_messages(self, conversation: list[ChatMessage]) -> list[dict[str, Any]]:
        system = [{"role": "system", "content": prompt} for prompt in TUTOR_SYSTEM_PROMPTS]
        return system + [message.model_dump() for message in conversation]

    async def complete(self, conversation: list[ChatMessage]) -> str:
        """Return the assistant's reply to ``conversation`` (empty string if none)."""
        settings = get_settings()
        try:
            response = await asyncio.wait_for(
                litellm.acompletion(
                    model=self.model,
                    messages=self.build_messages(conversation),
                    temperature=settings.CHAT_TEMPERATURE,
                    max_tokens=settings.CHAT_MAX_TOKENS,
                    top_p=settings.CHAT_TOP_P,
                    timeout=settings.CHAT_TIMEOUT,
                ),
                timeout=settings.CHAT_TIMEOUT,
            )
        except TimeoutError as e:
            logger.error(f"Chat completion timed out after {settings.CHAT_TIMEOUT}s")
            raise ExternalServiceError("Chat", "request timed out") from e
        except Exception as e:
            logger.exception("Error in chat completion")
            raise ExternalServiceError("Chat", "completion failed") from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        return choices[0].message.content or ""
