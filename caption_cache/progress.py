"""
Progress bars for the long-running stages.

The scanning and extraction code only sees a callback taking a count, so
they stay free of any display logic.
"""
from tqdm import tqdm

from . import config


def progress_bar(total: int, desc: str) -> tqdm:
    """Returns a tqdm bar sized for `total` items; pass its .update as the callback."""
    return tqdm(
        total=total,
        desc=desc,
        bar_format="{desc}: " + config.PROGRESS_BAR_FORMAT,
        colour=config.PROGRESS_BAR_COLOUR,
        dynamic_ncols=True,
    )
