"""
Extraction processing limits and constants.

Centralized configuration for chunk sizes, filter thresholds
and per-call timeouts used across the extraction pipeline.
"""

# PDF chunking
CHUNK_SIZE = 3
"""Pages per extraction chunk (keeps model context reliable on dense tables)"""

# Consolidation thresholds
MIN_STANDARD_CHARS = 10
"""Cleaned standard text shorter than this is dropped outright"""

MIN_FRAGMENT_CHARS = 5
"""Normalized key length below which non-sentence fragments are rejected"""

# External calls
CHUNK_TIMEOUT_SECONDS = 180.0
"""Upper bound for a single extraction call, retries included"""
