"""overlay_vendors.config.defaults
===============================

Central place for small, stable default values used across the vendor
adapters, model resolvers and the host-facing service helpers. These values
can be overridden through environment variables or an external config file
(see :mod:`overlay_vendors.config`) but provide sensible fallbacks for local
development and tests.

Module Purpose
--------------
- Provide a single import location for default constants (no I/O).
- Keep adapters free of magic literals: endpoints, token budgets and prompt
  texts are declared once here.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Vendor endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
PERPLEXITY_DEFAULT_BASE_URL = "https://api.perplexity.ai"

# Anthropic protocol version header value.
ANTHROPIC_API_VERSION = "2023-06-01"

# ---- Default models (mirrored by the vendor catalog) ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-20240620"
PERPLEXITY_DEFAULT_MODEL = "sonar"

# ---- Output token budgets ----
# OpenAI-compatible chat completions (OpenAI, Perplexity).
OPENAI_MAX_TOKENS = 1000
OPENAI_TEMPERATURE = 0.7
PERPLEXITY_MAX_TOKENS = 1000
PERPLEXITY_TEMPERATURE = 0.7

# Gemini / Anthropic budgets; image requests scale with the image count.
DEFAULT_MAX_OUTPUT_TOKENS = 1024
IMAGE_BASE_OUTPUT_TOKENS = 2048
IMAGE_PER_IMAGE_BONUS = 512
MAX_OUTPUT_TOKEN_CEILING = 4096

# Gemini generation config knobs.
GEMINI_TEMPERATURE = 0.7
GEMINI_TOP_P = 0.95
GEMINI_TOP_K = 40

# ---- Model resolution ----
# Attempts (initial request included) before an invalid-model error surfaces.
MAX_MODEL_ATTEMPTS = 5
# Cached model entries older than this are treated as absent.
MODEL_CACHE_TTL_MS = 12 * 60 * 60 * 1000

OPENAI_MODEL_CACHE_KEY = "openai_preferred_model"
GEMINI_MODEL_CACHE_KEY = "gemini_preferred_model"
ANTHROPIC_MODEL_CACHE_KEY = "anthropic_preferred_model"
PERPLEXITY_MODEL_CACHE_KEY = "perplexity_preferred_model"

# Model cache backend selection ("sqlite" or "memory") and sqlite location.
MODEL_CACHE_BACKEND_DEFAULT = "sqlite"
MODEL_CACHE_DEFAULT_PATH = "~/.overlay_vendors/model_cache.sqlite3"

# ---- Prompts ----
AUDIO_SUMMARY_SYSTEM_PROMPT = (
    "You are a real-time meeting summarizer. Produce concise rolling summaries "
    "focusing on decisions, action items, and key points."
)
OPENAI_AUDIO_SUMMARY_SYSTEM_PROMPT = AUDIO_SUMMARY_SYSTEM_PROMPT + " Avoid repeating previous context."

MEETING_SUMMARY_FALLBACK_SYSTEM_PROMPT = (
    "You are a real-time meeting summarizer. Produce concise summaries focused on "
    "key points, decisions, and action items."
)
MEETING_SUMMARY_FALLBACK_USER_TEMPLATE = (
    "Latest transcript chunk (append-only log, may contain duplicates):\n\n{transcript}\n\n"
    "Return just the current best summary:"
)

QUESTION_EXTRACTION_SYSTEM_PROMPT = (
    "You are a question extraction specialist. Analyze the transcript and identify ALL "
    'questions. Be comprehensive - catch questions that end with "?", rhetorical questions, '
    "indirect questions, and clarification requests. Return ONLY valid JSON array: "
    '[{"q":"exact question text","s":"microphone" or "system"}]. No markdown, no explanation.'
)
QUESTION_EXTRACTION_USER_TEMPLATE = "Transcript:\n{transcript}\n\nExtract all questions as JSON array:"
# Transcripts shorter than this are not worth a round-trip.
QUESTION_EXTRACTION_MIN_TRANSCRIPT_CHARS = 50
# Extracted questions must be longer than this to be kept.
QUESTION_MIN_CHARS = 5

# ---- CLI ----
CLI_DEFAULT_VENDOR = "openai"

# ---- SQLite config (infrastructure) ----
SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"


__all__ = [
    # Endpoints
    "OPENAI_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "PERPLEXITY_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    # Models
    "OPENAI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_MODEL",
    "PERPLEXITY_DEFAULT_MODEL",
    # Token budgets
    "OPENAI_MAX_TOKENS",
    "OPENAI_TEMPERATURE",
    "PERPLEXITY_MAX_TOKENS",
    "PERPLEXITY_TEMPERATURE",
    "DEFAULT_MAX_OUTPUT_TOKENS",
    "IMAGE_BASE_OUTPUT_TOKENS",
    "IMAGE_PER_IMAGE_BONUS",
    "MAX_OUTPUT_TOKEN_CEILING",
    "GEMINI_TEMPERATURE",
    "GEMINI_TOP_P",
    "GEMINI_TOP_K",
    # Model resolution
    "MAX_MODEL_ATTEMPTS",
    "MODEL_CACHE_TTL_MS",
    "OPENAI_MODEL_CACHE_KEY",
    "GEMINI_MODEL_CACHE_KEY",
    "ANTHROPIC_MODEL_CACHE_KEY",
    "PERPLEXITY_MODEL_CACHE_KEY",
    "MODEL_CACHE_BACKEND_DEFAULT",
    "MODEL_CACHE_DEFAULT_PATH",
    # Prompts
    "AUDIO_SUMMARY_SYSTEM_PROMPT",
    "OPENAI_AUDIO_SUMMARY_SYSTEM_PROMPT",
    "MEETING_SUMMARY_FALLBACK_SYSTEM_PROMPT",
    "MEETING_SUMMARY_FALLBACK_USER_TEMPLATE",
    "QUESTION_EXTRACTION_SYSTEM_PROMPT",
    "QUESTION_EXTRACTION_USER_TEMPLATE",
    "QUESTION_EXTRACTION_MIN_TRANSCRIPT_CHARS",
    "QUESTION_MIN_CHARS",
    # CLI
    "CLI_DEFAULT_VENDOR",
    # SQLite
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
]
