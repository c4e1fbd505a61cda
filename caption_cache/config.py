"""
Configuration constants for the caption cache builder.
"""
import os

# --- File Type Definitions ---
# Matched against the suffix without its dot, case-sensitively ("JPG" is not accepted)
SUPPORTED_EXTS = frozenset({'jpg', 'jpeg', 'png', 'webp'})
CAPTION_EXT = '.txt'

# --- Output ---
CACHE_FILENAME = "metadata_cache.json"

# --- Progress Display ---
# No ETA in the bar; recomputing it slows down very fast loops
PROGRESS_BAR_FORMAT = "[{elapsed}] {bar} {n_fmt:>7}/{total_fmt:7}"
PROGRESS_BAR_COLOUR = "cyan"

# --- Concurrency ---
def available_parallelism() -> int:
    """CPUs this process may run on, which can be fewer than the host has."""
    if hasattr(os, "process_cpu_count"):
        return os.process_cpu_count() or 1
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1

DEFAULT_THREADS = available_parallelism()
