from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


class ChatCompletionRequest(BaseModel):
    """One message or the whole conversation so far, oldest first."""

    conversation: ChatMessage | list[ChatMessage]

    def messages(self) -> list[ChatMessage]:
        if isinstance(self.conversation, list):
            return self.conversation
        return [self.conversation]


class ChatCompletionResponse(BaseModel):
    message: str
