import os
import logging
from pathlib import Path
from typing import Callable, Iterator, List, Optional
from concurrent.futures import ThreadPoolExecutor

from .. import config
from ..exceptions import DirectoryEnumerationError

ProgressCallback = Callable[[int], object]


class PathFilter:
    def __init__(self, recursive: bool = True, max_workers: int = config.DEFAULT_THREADS):
        self.recursive = recursive
        self.max_workers = max(1, max_workers)

    def filter(self, root: Path, on_progress: Optional[ProgressCallback] = None) -> List[Path]:
        """
        Returns every image under root that has a caption file next to it.

        The tree is listed up front, then each entry is checked on a thread pool.
        on_progress(1) is called once per entry visited, accepted or not.
        """
        entries = self.list_entries(root)
        return self.filter_entries(entries, on_progress)

    def list_entries(self, root: Path) -> List[Path]:
        entries = list(self.iter_entries(root))
        logging.info(f"Found {len(entries)} files!")
        return entries

    def filter_entries(self,
                       entries: List[Path],
                       on_progress: Optional[ProgressCallback] = None) -> List[Path]:
        """Checks already listed entries in parallel. Result order is not significant."""
        if not entries:
            return []

        logging.debug(f"Filtering {len(entries)} entries with {self.max_workers} workers")

        candidates = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for path, accepted in zip(entries, executor.map(self.is_candidate, entries)):
                if accepted:
                    candidates.append(path)
                if on_progress:
                    on_progress(1)

        return candidates

    def is_candidate(self, path: Path) -> bool:
        """
        An image qualifies when it is a regular file with a supported extension
        and a same-stem caption file exists at the time of the check.
        """
        if not path.is_file() or path.is_symlink():
            return False

        # Case-sensitive on purpose: "photo.JPG" is not a candidate
        ext = path.suffix[1:]
        if ext not in config.SUPPORTED_EXTS:
            return False

        return caption_path_for(path).exists()

    def iter_entries(self, root: Path) -> Iterator[Path]:
        """
        Yields filesystem entries under root (direct children only when not recursive).

        Uses a depth-first os.scandir walk. Directories are yielded like any other
        entry and descended into when recursive; symlinked directories are not followed.
        """
        stack = [root]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                raise DirectoryEnumerationError(current, e) from e

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name)

            dirs = []
            for e in entries:
                path = Path(e.path)
                if e.is_dir(follow_symlinks=False):
                    dirs.append(path)
                yield path

            if self.recursive:
                # Push dirs to stack (reversed so we process A before Z)
                for d in reversed(dirs):
                    stack.append(d)


def caption_path_for(image_path: Path) -> Path:
    """The caption file shares the image's stem: cat.png -> cat.txt"""
    return image_path.with_suffix(config.CAPTION_EXT)
