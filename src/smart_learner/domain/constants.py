"""Centralized constants for smart-learner.

Defaults for scheduling, storage layout and placeholder content live here so
every layer imports from a single source of truth.
"""

# ---------- Scheduling ----------
# Day counts indexed by tier. Tier 0 must stay at 0 (due today).
DEFAULT_INTERVALS = [0, 1, 3, 7, 14, 30, 90, 180, 365]

# ---------- Storage ----------
DECK_FILE_SUFFIX = ".sdeck"
AUDIO_DIR_NAME = "audio"
CONFIG_DIR_NAME = "smart-learner"

# ---------- New Cards ----------
PLACEHOLDER_FRONT = "New front"
PLACEHOLDER_BACK = "New back"

# ---------- Presentation ----------
NO_DECKS_LABEL = "No decks"
SEARCH_TRUNCATE_LEN = 80
