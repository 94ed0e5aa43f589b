from typing import Callable, Optional, Sequence

from config import AISettings
from models import Balance, ChatMessage, Tip, TipSource
from prompts import AI_FAILED, AI_KEY_MISSING, AI_NO_TIPS, AI_TIP_PREFIX, TIPS_PROMPT
from utils import parse_bullets


def report_error(message: str) -> None:
    print(f"  [!] {message}")


class CompletionClient:
    """Chat-completion backend shared by the tip advisor and the chat session."""

    def __init__(self, settings: AISettings):
        self.settings = settings
        self.provider = settings.provider
        self.model = settings.model
        self.client = None

    @property
    def configured(self) -> bool:
        return self.settings.has_credential

    # ── Provider Init ─────────────────────────────────────────────────────

    def _ensure_client(self):
        if self.client is not None:
            return self.client
        if not self.configured:
            raise EnvironmentError(f"API key for '{self.provider}' is not set.")

        api_key = self.settings.api_key.get_secret_value()
        if self.provider == "openai":
            from openai import AsyncOpenAI

            self.client = AsyncOpenAI(api_key=api_key)
        elif self.provider == "anthropic":
            import anthropic

            self.client = anthropic.AsyncAnthropic(api_key=api_key)
        elif self.provider == "gemini":
            import google.generativeai as genai

            genai.configure(api_key=api_key)
            self.client = genai.GenerativeModel(self.model)
        else:
            raise ValueError(f"Unknown AI provider '{self.provider}'.")
        return self.client

    # ── Complete ──────────────────────────────────────────────────────────

    async def complete(self, messages: Sequence[ChatMessage]) -> Optional[ChatMessage]:
        """Send the conversation; None when the reply carries no content."""
        client = self._ensure_client()

        if self.provider == "anthropic":
            text = await self._call_anthropic(client, messages)
        elif self.provider == "gemini":
            text = await self._call_gemini(client, messages)
        else:
            return await self._call_openai(client, messages)

        if not text:
            return None
        return ChatMessage(role="assistant", content=text)

    async def _call_openai(self, client, messages: Sequence[ChatMessage]) -> Optional[ChatMessage]:
        response = await client.chat.completions.create(
            model=self.model,
            messages=[m.model_dump() for m in messages],
            temperature=self.settings.temperature,
        )
        if not response.choices:
            return None
        reply = response.choices[0].message
        if reply is None or not reply.content:
            return None
        return ChatMessage(role=reply.role or "assistant", content=reply.content)

    async def _call_anthropic(self, client, messages: Sequence[ChatMessage]) -> str:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        turns = [
            {"role": m.role, "content": m.content}
            for m in messages
            if m.role != "system"
        ]
        # Conversations must open with a user turn
        while turns and turns[0]["role"] == "assistant":
            turns.pop(0)

        kwargs = {"system": system} if system else {}
        message = await client.messages.create(
            model=self.model,
            max_tokens=1024,
            temperature=self.settings.temperature,
            messages=turns,
            **kwargs,
        )
        return "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )

    async def _call_gemini(self, client, messages: Sequence[ChatMessage]) -> str:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = []
        for m in messages:
            if m.role == "system":
                continue
            role = "model" if m.role == "assistant" else "user"
            text = m.content
            if system and role == "user" and not any(c["role"] == "user" for c in contents):
                text = f"{system}\n\n{text}"
            contents.append({"role": role, "parts": [text]})

        response = await client.generate_content_async(
            contents,
            generation_config={"temperature": self.settings.temperature},
        )
        # .text raises on blocked or candidate-less replies
        candidates = getattr(response, "candidates", None)
        if not candidates or not candidates[0].content.parts:
            return ""
        return response.text


class AIAdvisor:
    """Requests personalized privacy tips for a wallet from the completion service."""

    def __init__(
        self,
        completion: CompletionClient,
        on_loading: Optional[Callable[[bool], None]] = None,
        on_error: Callable[[str], None] = report_error,
    ):
        self.completion = completion
        self.on_loading = on_loading
        self.on_error = on_error
        self.loading = False

    def _set_loading(self, value: bool) -> None:
        self.loading = value
        if self.on_loading:
            self.on_loading(value)

    @staticmethod
    def build_prompt(address: str, balances: Sequence[Balance]) -> str:
        token_info = ", ".join(f"{b.symbol}: {b.amount}" for b in balances)
        return TIPS_PROMPT.format(address=address, token_info=token_info)

    @staticmethod
    def parse_tips(text: str) -> list[Tip]:
        tips = [
            Tip(text=f"{AI_TIP_PREFIX}{line}", source=TipSource.AI)
            for line in parse_bullets(text)
        ]
        return tips or [Tip(text=AI_NO_TIPS, source=TipSource.AI)]

    async def request_tips(self, address: str, balances: Sequence[Balance]) -> list[Tip]:
        if not self.completion.configured:
            return [Tip(text=AI_KEY_MISSING, source=TipSource.AI)]

        prompt = self.build_prompt(address, balances)
        self._set_loading(True)
        try:
            reply = await self.completion.complete([ChatMessage(role="user", content=prompt)])
            return self.parse_tips(reply.content if reply else "")
        except Exception as e:
            self.on_error(f"AI tips failed: {e}")
            return [Tip(text=AI_FAILED, source=TipSource.AI)]
        finally:
            self._set_loading(False)
