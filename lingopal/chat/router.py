from typing import Annotated

from fastapi import APIRouter, Depends

from lingopal.auth import CurrentUserId
from lingopal.middleware.security import ai_route_limit

from .client import ChatClient
from .schemas import ChatCompletionRequest, ChatCompletionResponse


router = APIRouter(prefix="/api/chat", tags=["chat"], dependencies=[Depends(ai_route_limit)])


def get_chat_client() -> ChatClient:
    return ChatClient()


@router.post("/chat-completion")
async def chat_completion(
    data: ChatCompletionRequest,
    _current_user_id: CurrentUserId,
    client: Annotated[ChatClient, Depends(get_chat_client)],
) -> ChatCompletionResponse:
    """Continue a tutoring conversation with Lingo.

    The client sends the full conversation each time; nothing is kept
    server-side between requests.
    """
    reply = await client.complete(data.messages())
    return ChatCompletionResponse(message=reply)
