from typing import Optional, Sequence

from agent import AIAdvisor, CompletionClient, report_error
from chain_providers import DEFAULT_TOKENS, NATIVE_TOKEN, ChainClient, fetch_balances
from heuristics import derive_tips
from models import ConnectionStatus, RecommendationState, Tip, TipSource, TokenDescriptor
from prompts import TIP_FETCH_FAILED
from state import StateStore
from utils import is_evm_address, short_address


class RecommendationOrchestrator:
    """Runs balances -> heuristic tips -> AI tips for a connected wallet."""

    def __init__(
        self,
        chain_client: ChainClient,
        completion: CompletionClient,
        tokens: Sequence[TokenDescriptor] = DEFAULT_TOKENS,
        native: TokenDescriptor = NATIVE_TOKEN,
        store: Optional[StateStore[RecommendationState]] = None,
        on_error=report_error,
    ):
        self.chain_client = chain_client
        self.tokens = tuple(tokens)
        self.native = native
        self.on_error = on_error
        self.completion = completion
        self.store = store or StateStore(RecommendationState())
        self._generation = 0

    @property
    def state(self) -> RecommendationState:
        return self.store.snapshot

    def _advisor_for(self, generation: int) -> AIAdvisor:
        """Fresh advisor per cycle; its loading events only reach the live cycle."""

        def on_loading(loading: bool) -> None:
            if generation == self._generation:
                self.store.publish(ai_loading=loading)

        return AIAdvisor(self.completion, on_loading=on_loading, on_error=self.on_error)

    # ── Connection events ─────────────────────────────────────────────────

    async def connect(self, address: str) -> RecommendationState:
        address = address.strip()
        if not is_evm_address(address):
            raise ValueError(f"Unrecognized EVM address: {address}")

        self._generation += 1
        self.store.reset(RecommendationState(
            connection_status=ConnectionStatus.ANALYZING,
            address=address,
        ))
        await self.analyze(address)
        return self.state

    def disconnect(self) -> RecommendationState:
        self._generation += 1
        return self.store.reset(RecommendationState())

    # ── Analysis cycle ────────────────────────────────────────────────────

    async def analyze(self, address: str) -> None:
        generation = self._generation

        try:
            balances = await fetch_balances(
                address, self.chain_client, self.tokens, self.native
            )
        except Exception as e:
            self.on_error(f"Balance fetch failed for {short_address(address)}: {e}")
            if generation == self._generation:
                self.store.publish(
                    connection_status=ConnectionStatus.READY,
                    balances=(),
                    heuristic_tips=(Tip(text=TIP_FETCH_FAILED, source=TipSource.HEURISTIC),),
                    ai_tips=(),
                    ai_loading=False,
                )
            return

        heuristic_tips = derive_tips(balances, native_symbol=self.native.symbol)
        ai_tips = await self._advisor_for(generation).request_tips(address, balances)

        # A newer connection superseded this cycle
        if generation != self._generation:
            return

        self.store.publish(
            connection_status=ConnectionStatus.READY,
            balances=tuple(balances),
            heuristic_tips=tuple(heuristic_tips),
            ai_tips=tuple(ai_tips),
            ai_loading=False,
        )
