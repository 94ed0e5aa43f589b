"""Shared fakes for the chain client and completion service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from agent import CompletionClient
from chain_providers import ChainClient, ChainClientError


WALLET = "0x" + "ab" * 20
ETH = 10 ** 18


class FakeChainClient(ChainClient):
    def __init__(self, native: int = 0, tokens: dict | None = None, fail_on: str | None = None):
        self.native = native
        self.tokens = tokens or {}
        self.fail_on = fail_on
        self.calls: list[tuple[str, str]] = []

    async def get_native_balance(self, address: str) -> int:
        self.calls.append(("native", address))
        if self.fail_on == "native":
            raise ChainClientError("rpc unavailable")
        return self.native

    async def get_token_balance(self, contract_address: str, address: str) -> int:
        self.calls.append(("token", contract_address))
        if self.fail_on == contract_address:
            raise ChainClientError("execution reverted")
        return self.tokens.get(contract_address, 0)


@pytest.fixture
def chain_factory():
    return FakeChainClient


@pytest.fixture
def completion_factory():
    """Build a mocked CompletionClient: reply, credential flag, or raised error."""

    def build(reply=None, configured: bool = True, error: Exception | None = None):
        completion = MagicMock(spec=CompletionClient)
        completion.configured = configured
        completion.complete = AsyncMock(return_value=reply, side_effect=error)
        return completion

    return build
