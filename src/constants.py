"""All magic values live here — no inline literals anywhere else."""

# External model endpoint
DEFAULT_LLM_ENDPOINT = "https://toolkit.rork.com/text/llm/"
LLM_COMPLETION_FIELD = "completion"
IMAGE_DATA_URI = "data:image/jpeg;base64,%s"
RAW_EXCERPT_LENGTH = 120

# Job lifecycle
DEFAULT_JOB_TTL_SECONDS = 30 * 60
DEFAULT_SWEEP_INTERVAL_SECONDS = 0
JOB_ID_RANDOM_BYTES = 6

# Category vocabulary
CATEGORIES: tuple[str, ...] = (
    "sexy",
    "elegant",
    "casual",
    "naive",
    "trendy",
    "anime",
    "sixties",
)
ALL_CATEGORIES = "rate"

# Validation thresholds
SCORE_MAX = 12
MIN_FIELD_LENGTH = 10
MIN_OVERALL_ANALYSIS_LENGTH = 20
SINGLE_TEXT_FIELDS: tuple[str, ...] = ("style", "colorCoordination", "accessories", "harmony")

# Failure reasons (machine-readable, never localized)
ERR_HTTP = "llm_http_%d"
ERR_HTML_RESPONSE = "llm_html_response"
ERR_JSON_PARSE = "llm_json_parse_error"
ERR_INVALID_COMPLETION = "invalid_completion"
ERR_SCHEMA_VALIDATION = "schema_validation_failed"
ERR_NOT_FOUND = "not_found"

# Supported languages → name the model understands
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "tr": "Turkish",
}

# Plan → verbosity policy
LENGTH_POLICIES: dict[str, str] = {
    "ultimate": "very long (7+ sentences, detailed and thorough)",
    "premium": "long (5-6 sentences, well-developed)",
    "basic": "short (1-2 sentences, concise)",
}
DEFAULT_LENGTH_POLICY = "very short (1-2 sentences, brief)"

# Prompt text
PROMPT_SYSTEM = (
    'You are a professional fashion stylist and outfit critic focused on the "%s" aesthetic. '
    "OUTPUT LENGTH POLICY: %s. Return strict JSON."
)
PROMPT_LANGUAGE = "All outputs MUST be in %s."
PROMPT_USER = 'Analyze this outfit for the "%s" style and rate out of 12. Respond in %s.'
PROMPT_FOCUS = "SCORING FOCUS: %s"
CATEGORY_FOCUS: dict[str, str] = {
    "sexy": "how alluring, confident, and body-conscious the outfit is",
    "elegant": "sophistication, refinement, and timeless appeal",
    "casual": "comfort, practicality, and effortless wearability",
    "naive": "sweetness, innocence, and youthful charm",
    "trendy": "current fashion trends and modern appeal",
    "anime": "kawaii elements, bright colors, and playful styling",
    "sixties": "authentic 1960s mod elements and retro aesthetics",
    ALL_CATEGORIES: "analyze across all seven categories; the same outfit should score differently per category",
}
PROMPT_SIXTIES_NOTE = (
    "For sixties style, prioritize authentic 1960s elements over general fashion appeal. "
    "A perfect sixties outfit with authentic mod elements should score 10-12."
)
PROMPT_SCHEMA_SINGLE = (
    "You MUST respond with ONLY a JSON object of this exact shape, no prose, no code fences: "
    '{"style": string, "colorCoordination": string, "accessories": string, "harmony": string, '
    '"score": number between 1 and 12, "suggestions": [string, string, string]}. '
    "Every text field must be at least one full sentence."
)
PROMPT_SCHEMA_ALL = (
    "You MUST respond with ONLY a JSON object of this exact shape, no prose, no code fences: "
    '{"results": [{"category": string, "score": number between 1 and 12, "analysis": string, '
    '"suggestions": [string]}], "overallScore": number between 1 and 12, "overallAnalysis": string}. '
    '"results" MUST contain exactly 7 entries, one per category, in this order: %s. '
    "Every analysis must be at least one full sentence."
)

# HTTP surface
API_TITLE = "Outfit Analysis Jobs"
API_VERSION = "0.1.0"
HEALTH_MESSAGE = "API is running"

# Log messages
MSG_SERVER_STARTING = "Starting analysis job server on %s:%d…"
MSG_JOB_CREATED = "Job %s created (category=%s, images=%d)"
MSG_JOB_PROCESSING = "Job %s processing"
MSG_JOB_RETRY = "Job %s first attempt rejected (%s) — retrying with strict schema"
MSG_JOB_SUCCEEDED = "✓ Job %s succeeded (%.1fs)"
MSG_JOB_FAILED = "✗ Job %s failed: %s (%.1fs)"
MSG_JOB_CRASHED = "Job %s crashed unexpectedly"
MSG_JOB_EVICTED = "Job %s expired — evicted"
MSG_JOB_GONE = "Job %s vanished before %s"
MSG_JOB_TERMINAL = "Job %s already terminal (%s) — ignoring %s"
MSG_SWEEP = "Sweep evicted %d expired job(s)"
MSG_LLM_CALL = "→ Model endpoint (strict=%s, images=%d)"
MSG_LLM_HTTP_ERROR = "Model endpoint returned HTTP %d: %s"
MSG_LLM_PARSE_ERROR = "Could not parse model response (%s): %s"
MSG_SHUTDOWN_CANCEL = "Cancelling %d in-flight job(s)"
