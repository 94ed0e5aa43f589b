from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Enums ─────────────────────────────────────────────────────────────────────


class ConnectionStatus(str, Enum):
    DISCONNECTED = "disconnected"
    ANALYZING = "analyzing"
    READY = "ready"


class TipSource(str, Enum):
    HEURISTIC = "heuristic"
    AI = "ai"


Role = Literal["user", "assistant", "system"]


# ── Core Data Models ──────────────────────────────────────────────────────────


class TokenDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    contract_address: str
    decimals: int = 18
    icon: str = ""


class Balance(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    amount: str
    icon: str = ""


class Tip(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    source: TipSource

    def __str__(self) -> str:
        return self.text


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


# ── Session State ─────────────────────────────────────────────────────────────


class RecommendationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    connection_status: ConnectionStatus = ConnectionStatus.DISCONNECTED
    address: Optional[str] = None
    balances: tuple[Balance, ...] = ()
    heuristic_tips: tuple[Tip, ...] = ()
    ai_tips: tuple[Tip, ...] = ()
    ai_loading: bool = False


class ChatState(BaseModel):
    model_config = ConfigDict(frozen=True)

    transcript: tuple[ChatMessage, ...] = ()
    pending: bool = False


# ── API Models ────────────────────────────────────────────────────────────────


class HealthResponse(BaseModel):
    status: str
    version: str


class ConnectRequest(BaseModel):
    address: str = Field(..., description="Public EVM wallet address (0x...)")


class ChatRequest(BaseModel):
    message: str = Field(..., description="User message for the assistant")


class ChatResponse(BaseModel):
    transcript: list[ChatMessage]
    loading: bool = False
