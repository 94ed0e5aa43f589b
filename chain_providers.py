from abc import ABC, abstractmethod
from typing import Optional, Sequence

import httpx

from models import Balance, TokenDescriptor
from utils import format_token_amount, format_units


# ── Static Token Configuration ────────────────────────────────────────────────

NATIVE_TOKEN = TokenDescriptor(
    name="Ethereum",
    symbol="ETH",
    contract_address="",
    decimals=18,
    icon="https://raw.githubusercontent.com/spothq/cryptocurrency-icons/master/128/color/eth.png",
)

PRIVACY_TOKEN_SYMBOL = "PRVX"

DEFAULT_TOKENS: tuple[TokenDescriptor, ...] = (
    TokenDescriptor(
        name="PrivacyX",
        symbol="PRVX",
        contract_address="0x700509775B89e6695Da271c79c976d65846A0180",
        decimals=18,
        icon="https://raw.githubusercontent.com/Privacyx-org/prvx-assets/main/logo-PRVX-32x32.svg",
    ),
    TokenDescriptor(
        name="Tether",
        symbol="USDT",
        contract_address="0xdAC17F958D2ee523a2206206994597C13D831ec7",
        decimals=6,
        icon="https://cryptologos.cc/logos/tether-usdt-logo.png?v=029",
    ),
    TokenDescriptor(
        name="Dai Stablecoin",
        symbol="DAI",
        contract_address="0x6B175474E89094C44Da98b954EedeAC495271d0F",
        decimals=18,
        icon="https://cryptologos.cc/logos/multi-collateral-dai-dai-logo.png?v=029",
    ),
)

# keccak("balanceOf(address)")[:4]
BALANCE_OF_SELECTOR = "0x70a08231"


class ChainClientError(Exception):
    """Raised when a balance query cannot be completed."""


# ── Base Client ───────────────────────────────────────────────────────────────


class ChainClient(ABC):
    """Abstract balance source for a single chain."""

    @abstractmethod
    async def get_native_balance(self, address: str) -> int:
        ...

    @abstractmethod
    async def get_token_balance(self, contract_address: str, address: str) -> int:
        ...


# ── EVM JSON-RPC Client ───────────────────────────────────────────────────────


class EVMRpcClient(ChainClient):
    def __init__(
        self,
        rpc_url: str,
        timeout: float = 15,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._transport = transport

    async def _rpc(self, method: str, params: list) -> str:
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                resp = await client.post(self.rpc_url, json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params,
                    "id": 1,
                }, timeout=self.timeout)
                resp.raise_for_status()
                data = resp.json()
            except (httpx.HTTPError, ValueError) as e:
                raise ChainClientError(f"{method} failed: {e}") from e

        if not isinstance(data, dict):
            raise ChainClientError(f"{method} returned a malformed response")
        if data.get("error"):
            err = data["error"]
            message = err.get("message") if isinstance(err, dict) else err
            raise ChainClientError(f"{method} error: {message}")

        result = data.get("result")
        if not isinstance(result, str):
            raise ChainClientError(f"{method} returned no result")
        return result

    @staticmethod
    def _hex_to_int(value: str) -> int:
        if value in ("0x", ""):
            return 0
        try:
            return int(value, 16)
        except ValueError as e:
            raise ChainClientError(f"Invalid hex quantity: {value!r}") from e

    async def get_native_balance(self, address: str) -> int:
        result = await self._rpc("eth_getBalance", [address, "latest"])
        return self._hex_to_int(result)

    async def get_token_balance(self, contract_address: str, address: str) -> int:
        data = BALANCE_OF_SELECTOR + address.lower().removeprefix("0x").rjust(64, "0")
        result = await self._rpc(
            "eth_call",
            [{"to": contract_address, "data": data}, "latest"],
        )
        return self._hex_to_int(result)


# ── Balance Fetching ──────────────────────────────────────────────────────────


async def fetch_balances(
    address: str,
    chain_client: ChainClient,
    tokens: Sequence[TokenDescriptor] = DEFAULT_TOKENS,
    native: TokenDescriptor = NATIVE_TOKEN,
) -> list[Balance]:
    """
    Native balance first (always, full precision), then every configured token
    with a non-zero balance, rounded to 4 decimals, in configuration order.

    Any client failure propagates; no partial list is ever returned.
    """
    native_raw = await chain_client.get_native_balance(address)
    balances = [
        Balance(
            name=native.name,
            symbol=native.symbol,
            amount=format_units(native_raw, native.decimals),
            icon=native.icon,
        )
    ]

    for token in tokens:
        raw = await chain_client.get_token_balance(token.contract_address, address)
        if raw <= 0:
            continue
        balances.append(Balance(
            name=token.name,
            symbol=token.symbol,
            amount=format_token_amount(raw, token.decimals),
            icon=token.icon,
        ))

    return balances
