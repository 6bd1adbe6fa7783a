"""
Constants and configuration values for TransTip.
"""
import re

# ============== VERSION ==============
VERSION = "0.4.0"
APP_NAME = "TransTip"

# ============== NETWORK ==============
LOCK_PORT = 47831  # Port for single instance lock

# ============== TIMING ==============
HOTKEY_COOLDOWN = 0.3  # Seconds between accepted hotkey presses
QUEUE_POLL_MS = 50     # Main loop poll interval for UI work from worker threads
READ_CHUNK_SIZE = 4096

# ============== DISPLAY ==============
ARROW = " → "

# ============== GAPPED SENTENCE ==============
# Stands in for the elided word. Must not look like sentence punctuation,
# and the output matcher has to accept runs of any length since the
# translation tool may shorten or lengthen it.
GAP_PLACEHOLDER = "_" * 12
GAP_PATTERN = re.compile(r"_+")

NO_GAP_MESSAGE = "No word/sentence found at this position"
