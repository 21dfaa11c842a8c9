"""Centralized constants for cardwise.

Scheduling and analysis thresholds are compatibility constants: existing
fixtures depend on the exact values, so they are not exposed as settings.
"""

# ---------- SM-2 ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
DEFAULT_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3
EASY_QUALITY = 4

# ---------- Adaptive Feedback ----------
FAST_RESPONSE_MS = 8000
DEFAULT_RESPONSE_TIME_MS = 10000
EXCELLENT_STREAK = 2

# ---------- Weakness Analysis (heuristic ease -> success-rate buckets) ----------
HIGH_EASE_THRESHOLD = 2.5
MID_EASE_THRESHOLD = 2.0
HIGH_EASE_SUCCESS_RATE = 0.8
MID_EASE_SUCCESS_RATE = 0.5
LOW_EASE_SUCCESS_RATE = 0.2
STRONG_ACCURACY = 0.8
HIGH_PRIORITY_ERROR_RATE = 0.6
MEDIUM_PRIORITY_ERROR_RATE = 0.4
IMPROVING_WEAK_RATIO = 0.3
STABLE_WEAK_RATIO = 0.6
LOW_OVERALL_ACCURACY = 0.6

# ---------- Deck Composer ----------
DEFAULT_MAX_CARDS = 20
DELIBERATE_PRACTICE_CATEGORY = "deliberate-practice"
INTERLEAVED_CATEGORY = "interleaved"
UNKNOWN_ORIGIN = "unknown"

# ---------- Metacognition ----------
DEFAULT_RATING_SCALE = 5

# ---------- Deck Store ----------
DECK_INDEX_KEY = "user_decks"
DECK_CARDS_KEY_PREFIX = "deck_cards_"
