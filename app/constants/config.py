"""
Application configuration constants.
Centralized keyword tables, defaults, and limits for the verification pipeline.
"""

# ============================================================================
# LLM MODEL SETTINGS
# ============================================================================

# Default chat model for AI insight and AI detection
LLM_MODEL_NAME = "moonshotai/kimi-k2-instruct"

# Temperature for LLM calls (lower = more deterministic)
LLM_TEMPERATURE = 0.2

# AI detection only looks at the head of the text
AI_DETECTION_MAX_CHARS = 4000

# ============================================================================
# STATUS NORMALIZATION KEYWORDS (checked in order, substring, lowercase)
# ============================================================================

CLAIM_VERIFIED_KEYWORDS = ("true", "verified", "accurate", "correct")
CLAIM_FALSE_KEYWORDS = ("false", "incorrect", "wrong", "fake")

CITATION_VALID_KEYWORDS = ("valid", "exists", "found", "working")
CITATION_FAKE_KEYWORDS = ("fake", "fabricated", "nonexistent", "false")

# ============================================================================
# MERGE DEFAULTS
# ============================================================================

DEFAULT_TRUST_SCORE = 50

# Length of the prefix used when matching AI source suggestions to claims
SUGGESTION_MATCH_PREFIX = 30

# Backend succeeded, AI insight missing
DEFAULT_RISK = "Medium"
DEFAULT_RISK_REASON = "Unable to assess"
DEFAULT_SUMMARY = ""

# Backend failed
FALLBACK_RISK = "Unknown"
FALLBACK_RISK_REASON = "Backend verification required"
FALLBACK_SUMMARY = "Unable to verify without backend"
FALLBACK_ERROR = "Backend verification failed"

# ============================================================================
# URL PROBE
# ============================================================================

UNKNOWN_URL = "unknown"
PROBE_TIMEOUT_SECONDS = 5.0
PROBE_USER_AGENT = "Mozilla/5.0 (compatible; ContentVerifier/1.0)"
PROBE_PREVIEW_CHARS = 300

# ============================================================================
# HISTORY
# ============================================================================

HISTORY_PREVIEW_CHARS = 200
HISTORY_MAX_PAGE_SIZE = 100
