MISTRAL_CHAT_ENDPOINT = "https://api.mistral.ai/v1/chat/completions"
MISTRAL_HEALTH_URL = "https://api.mistral.ai/v1/models"
DEFAULT_MODEL = "mistral-large-latest"

RATE_LIMIT_ERROR_CODE = 429
UPSTREAM_ERROR_CODE = 502

ALLOWED_ROLES = ("user", "assistant")

SYSTEM_PROMPT = " ".join([
    "You are IsraelGPT, a helpful AI assistant specializing in Israel-focused knowledge, culture, technology, and Jewish heritage.",
    "Provide thoughtful, concise answers in the language the user uses (Hebrew or English).",
    "If a question is outside your scope, politely explain the limitation and offer to help with a related topic.",
])

# Shown to callers whenever the upstream call fails.
UPSTREAM_FAILURE_MESSAGE = "IsraelGPT אינו יכול להשיב כרגע. אנא נסו שוב מאוחר יותר."

METHOD_NOT_ALLOWED_MESSAGE = "Method Not Allowed"
MISSING_API_KEY_MESSAGE = "Missing Mistral API key configuration"
INVALID_PAYLOAD_MESSAGE = "Invalid request payload"
EMPTY_CONVERSATION_MESSAGE = "Conversation must include at least one message"

# Whitespace ignored when deciding whether message content is blank: the
# ECMAScript WhiteSpace and LineTerminator sets, which include U+FEFF but
# not the \x1c-\x1f separators or U+0085.
BLANK_CHARACTERS = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)
