from typing import Optional

from agent import CompletionClient, report_error
from models import ChatMessage, ChatState
from prompts import (
    AI_KEY_MISSING,
    CHAT_GREETING,
    CHAT_NETWORK_ERROR,
    CHAT_NO_RESPONSE,
    TYPING_INDICATOR,
)
from state import StateStore


GREETING = ChatMessage(role="assistant", content=CHAT_GREETING)


class ChatSession:
    """
    Conversational follow-up with the assistant.

    The whole transcript is resent on every turn; the completion service keeps
    no session state. Only one send may be in flight at a time.
    """

    def __init__(
        self,
        completion: CompletionClient,
        store: Optional[StateStore[ChatState]] = None,
        on_error=report_error,
    ):
        self.completion = completion
        self.on_error = on_error
        self.store = store or StateStore(ChatState(transcript=(GREETING,)))
        # bumped by reset(); replies from an older epoch are discarded
        self._epoch = 0

    @property
    def transcript(self) -> list[ChatMessage]:
        return list(self.store.snapshot.transcript)

    @property
    def loading(self) -> bool:
        return self.store.snapshot.pending

    def typing_indicator(self) -> Optional[ChatMessage]:
        """Synthetic placeholder shown while a reply is pending. Never stored."""
        if not self.loading:
            return None
        return ChatMessage(role="assistant", content=TYPING_INDICATOR)

    def reset(self) -> ChatState:
        self._epoch += 1
        return self.store.reset(ChatState(transcript=(GREETING,)))

    async def send(self, text: str) -> None:
        if not text or not text.strip() or self.loading:
            return

        epoch = self._epoch
        history = self.store.snapshot.transcript + (ChatMessage(role="user", content=text),)
        self.store.publish(transcript=history, pending=True)

        try:
            reply = await self._request_reply(history)
        except BaseException:
            # cancelled mid-flight: keep the user's message, clear the indicator
            if epoch == self._epoch:
                self.store.publish(pending=False)
            raise

        if epoch != self._epoch:
            return
        self.store.publish(transcript=history + (reply,), pending=False)

    async def _request_reply(self, history: tuple[ChatMessage, ...]) -> ChatMessage:
        if not self.completion.configured:
            return ChatMessage(role="assistant", content=AI_KEY_MISSING)
        try:
            reply = await self.completion.complete(list(history))
        except Exception as e:
            self.on_error(f"Chat request failed: {e}")
            return ChatMessage(role="assistant", content=CHAT_NETWORK_ERROR)
        if reply is None or not reply.content:
            return ChatMessage(role="assistant", content=CHAT_NO_RESPONSE)
        return reply
