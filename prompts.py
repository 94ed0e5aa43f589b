ASSISTANT_NAME = "Privacyx Guardian"


TIPS_PROMPT = """You are a Web3 privacy expert. Wallet: {address}. Tokens: {token_info}. \
Return 3 bullet points with personalized advice."""


CHAT_GREETING = (
    f"Hello! I'm {ASSISTANT_NAME}. "
    "How can I help you with your on-chain privacy today?"
)

TYPING_INDICATOR = f"✍️ {ASSISTANT_NAME} is typing..."


# ── Heuristic tips ────────────────────────────────────────────────────────────

TIP_COLD_STORAGE = "🪙 You hold over 1 {symbol} - consider using a cold wallet."
TIP_CONSOLIDATE = "💡 Your {symbol} balance is low. Consider consolidating wallets."
TIP_TOKEN_DETECTED = "🔎 {symbol} detected: {amount} - avoid reusing this address."
TIP_PRIVACY_TOKEN = "🧬 Use {symbol} staking or mixer to enhance your privacy."
TIP_MIXER = "🔍 Try using the PRVX Mixer to anonymize large transfers."
TIP_FETCH_FAILED = "❌ Failed to analyze wallet."


# ── AI placeholders ───────────────────────────────────────────────────────────

AI_TIP_PREFIX = "🤖 "
AI_NO_TIPS = "🤖 No actionable AI tips generated."
AI_KEY_MISSING = "⚠️ API key missing"
AI_FAILED = "⚠️ Failed to fetch AI tips."

CHAT_NO_RESPONSE = "⚠️ No response from the AI."
CHAT_NETWORK_ERROR = "⚠️ Network error. Please try again."
