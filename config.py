import os
from typing import Optional

from pydantic import BaseModel, SecretStr


DEFAULT_RPC_URL = "https://ethereum-rpc.publicnode.com"

# provider -> (credential env var, model env var, default model)
AI_PROVIDERS: dict[str, tuple[str, str, str]] = {
    "openai": ("OPENAI_API_KEY", "OPENAI_MODEL", "gpt-3.5-turbo"),
    "anthropic": ("ANTHROPIC_API_KEY", "CLAUDE_MODEL", "claude-sonnet-4-6"),
    "gemini": ("GEMINI_API_KEY", "GEMINI_MODEL", "gemini-2.0-flash"),
}


class AISettings(BaseModel):
    provider: str = "openai"
    api_key: Optional[SecretStr] = None
    model: str = "gpt-3.5-turbo"
    temperature: float = 0.7

    @property
    def has_credential(self) -> bool:
        return self.api_key is not None


class Settings(BaseModel):
    ai: AISettings = AISettings()
    rpc_url: str = DEFAULT_RPC_URL
    host: str = "0.0.0.0"
    port: int = 8000
    app_env: str = "development"


def _env(name: str) -> Optional[str]:
    """Read an env var, treating blank values as unset."""
    value = os.getenv(name, "").strip()
    return value or None


def load_ai_settings() -> AISettings:
    provider = os.getenv("AI_PROVIDER", "openai").lower()
    if provider not in AI_PROVIDERS:
        raise ValueError(
            f"Unknown AI_PROVIDER '{provider}'. "
            "Set AI_PROVIDER to 'openai', 'anthropic', or 'gemini'."
        )

    key_var, model_var, default_model = AI_PROVIDERS[provider]
    api_key = _env(key_var)
    return AISettings(
        provider=provider,
        api_key=SecretStr(api_key) if api_key else None,
        model=_env(model_var) or default_model,
        temperature=float(os.getenv("AI_TEMPERATURE", "0.7")),
    )


def load_rpc_url() -> str:
    rpc_url = _env("ETH_RPC_URL")
    if rpc_url:
        return rpc_url
    alchemy_key = _env("ALCHEMY_API_KEY")
    if alchemy_key:
        return f"https://eth-mainnet.g.alchemy.com/v2/{alchemy_key}"
    return DEFAULT_RPC_URL


def load_settings() -> Settings:
    """Build settings from the process environment (call load_dotenv() first)."""
    return Settings(
        ai=load_ai_settings(),
        rpc_url=load_rpc_url(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        app_env=os.getenv("APP_ENV", "development"),
    )
