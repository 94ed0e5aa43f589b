from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastmcp import FastMCP

load_dotenv()

from agent import CompletionClient
from chain_providers import EVMRpcClient
from chat import ChatSession
from config import Settings, load_settings
from models import ChatRequest, ChatResponse, ConnectRequest, HealthResponse, RecommendationState
from wallet_analyzer import RecommendationOrchestrator


VERSION = "1.0.0"


# ── Session ───────────────────────────────────────────────────────────────────

settings: Settings | None = None
orchestrator: RecommendationOrchestrator | None = None
chat_session: ChatSession | None = None


def build_session(cfg: Settings) -> tuple[RecommendationOrchestrator, ChatSession]:
    completion = CompletionClient(cfg.ai)
    return (
        RecommendationOrchestrator(EVMRpcClient(cfg.rpc_url), completion),
        ChatSession(completion),
    )


# ── MCP Server (mounted at /mcp) ─────────────────────────────────────────────

mcp = FastMCP(
    name="Privacyx Guardian",
    instructions=(
        "Inspects an Ethereum wallet for privacy and security hygiene. "
        "Provide a public wallet address and get its ETH and token balances, "
        "rule-based privacy tips, and AI-generated personalized advice."
    ),
)


@mcp.tool()
async def inspect_wallet(address: str) -> dict:
    """
    Inspect an Ethereum wallet and return privacy tips.

    Args:
        address: Public EVM wallet address (0x...).

    Returns:
        Balances, heuristic tips and AI tips for the wallet.
    """
    state = await orchestrator.connect(address)
    return state.model_dump(mode="json")


# ── Lifespan ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    global settings, orchestrator, chat_session
    settings = load_settings()
    orchestrator, chat_session = build_session(settings)
    if not settings.ai.has_credential:
        print(f"  [!] AI tips disabled: no API key for '{settings.ai.provider}'")
    print(f"  AI Provider: {settings.ai.provider} | Model: {settings.ai.model}")
    print("  Privacyx Guardian ready")
    yield
    print("  Shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Privacyx Guardian",
    description=(
        "Wallet-inspection assistant for Ethereum. Aggregates ETH and token "
        "balances, derives rule-based privacy tips, asks a language model for "
        "personalized advice, and answers follow-up questions in a chat.\n\n"
        "Exposes **REST** and **MCP** (`/mcp`) endpoints."
    ),
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/mcp", mcp.http_app())


# ── Info ──────────────────────────────────────────────────────────────────────


@app.get("/", tags=["Info"])
def root(request: Request):
    base = str(request.base_url).rstrip("/")
    return {
        "name": "Privacyx Guardian",
        "version": VERSION,
        "endpoints": {
            "docs": f"{base}/docs",
            "health": f"{base}/health",
            "connect": f"{base}/connect",
            "state": f"{base}/state",
            "chat": f"{base}/chat",
            "mcp": f"{base}/mcp",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["Info"])
def health():
    return HealthResponse(status="ok", version=VERSION)


# ── Wallet ────────────────────────────────────────────────────────────────────


@app.post("/connect", response_model=RecommendationState, tags=["Wallet"])
async def connect(req: ConnectRequest):
    """
    Connect a wallet address and run one analysis cycle.

    Balances are fetched, heuristic tips derived and AI tips requested in that
    order; the combined result is returned once all three are available.
    """
    try:
        return await orchestrator.connect(req.address)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/state", response_model=RecommendationState, tags=["Wallet"])
def state():
    return orchestrator.state


@app.post("/disconnect", response_model=RecommendationState, tags=["Wallet"])
def disconnect():
    return orchestrator.disconnect()


# ── Chat ──────────────────────────────────────────────────────────────────────


@app.get("/chat", response_model=ChatResponse, tags=["Chat"])
def chat_transcript():
    return ChatResponse(transcript=chat_session.transcript, loading=chat_session.loading)


@app.post("/chat", response_model=ChatResponse, tags=["Chat"])
async def chat(req: ChatRequest):
    if chat_session.loading:
        raise HTTPException(status_code=409, detail="A reply is already pending.")
    await chat_session.send(req.message)
    return ChatResponse(transcript=chat_session.transcript, loading=chat_session.loading)


@app.post("/chat/reset", response_model=ChatResponse, tags=["Chat"])
def chat_reset():
    chat_session.reset()
    return ChatResponse(transcript=chat_session.transcript, loading=chat_session.loading)


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    cfg = load_settings()
    uvicorn.run(
        "main:app",
        host=cfg.host,
        port=cfg.port,
        reload=cfg.app_env == "development",
    )
