from decimal import Decimal
from typing import Sequence

from chain_providers import NATIVE_TOKEN, PRIVACY_TOKEN_SYMBOL
from models import Balance, Tip, TipSource
from prompts import (
    TIP_COLD_STORAGE,
    TIP_CONSOLIDATE,
    TIP_MIXER,
    TIP_PRIVACY_TOKEN,
    TIP_TOKEN_DETECTED,
)


COLD_STORAGE_THRESHOLD = Decimal(1)


def derive_tips(
    balances: Sequence[Balance],
    native_symbol: str = NATIVE_TOKEN.symbol,
    privacy_symbol: str = PRIVACY_TOKEN_SYMBOL,
) -> list[Tip]:
    """Rule-based tips for a balance snapshot. Pure; output order is stable."""
    native = next((b for b in balances if b.symbol == native_symbol), None)
    native_amount = Decimal(native.amount) if native else Decimal(0)

    texts: list[str] = []
    if native_amount > COLD_STORAGE_THRESHOLD:
        texts.append(TIP_COLD_STORAGE.format(symbol=native_symbol))
    else:
        texts.append(TIP_CONSOLIDATE.format(symbol=native_symbol))

    for balance in balances:
        if balance is native or Decimal(balance.amount) <= 0:
            continue
        texts.append(TIP_TOKEN_DETECTED.format(symbol=balance.symbol, amount=balance.amount))
        if balance.symbol == privacy_symbol:
            texts.append(TIP_PRIVACY_TOKEN.format(symbol=privacy_symbol))

    texts.append(TIP_MIXER)
    return [Tip(text=t, source=TipSource.HEURISTIC) for t in texts]
