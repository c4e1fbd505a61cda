import logging
from pathlib import Path

from .cache import CacheWriter
from .exceptions import RootNotFoundError
from .metadata.extract import MetadataExtractor
from .pipeline import ExtractionPipeline, PipelineResult
from .progress import progress_bar
from .scanning.filesystem import PathFilter
from . import config


class CaptionCacheApp:
    def __init__(self,
                 threads: int = config.DEFAULT_THREADS,
                 recursive: bool = True,
                 fail_fast: bool = True):
        self.threads = threads
        self.recursive = recursive
        self.fail_fast = fail_fast

    def build(self, input_dir: Path) -> Path:
        """
        Rebuilds the metadata cache for input_dir from scratch.
        1. List entries
        2. Filter (images with captions)
        3. Extract (resolution + caption)
        4. Save

        Returns the path of the written cache.

        Raises:
            RootNotFoundError: input_dir is missing or not a directory.
            ExtractionError: under fail-fast, the first unreadable candidate.
                No cache is written in that case.
        """
        if not input_dir.is_dir():
            raise RootNotFoundError(input_dir)

        logging.info(f"Input directory: {input_dir}")

        # --- Step 1: Listing ---
        logging.info("Checking for all files...")
        path_filter = PathFilter(recursive=self.recursive, max_workers=self.threads)
        entries = path_filter.list_entries(input_dir)

        # --- Step 2: Filtering ---
        logging.info("Filtering files...")
        with progress_bar(len(entries), "Filtering") as bar:
            candidates = path_filter.filter_entries(entries, on_progress=bar.update)
        logging.info(f"Found {len(candidates)} images with captions!")

        # --- Step 3: Extraction ---
        logging.info("Caching metadata...")
        result = self._extract(candidates)
        logging.info("Metadata cached!")

        if result.failures:
            logging.warning(
                f"Skipped {len(result.failures)} of {len(candidates)} images that could not be read"
            )

        # --- Step 4: Save ---
        logging.info("Saving metadata cache...")
        cache_path = CacheWriter().write(input_dir, result.cache)
        logging.info(f"Metadata cache saved to {cache_path}")

        return cache_path

    def _extract(self, candidates) -> PipelineResult:
        pipeline = ExtractionPipeline(
            MetadataExtractor(),
            max_in_flight=self.threads,
            fail_fast=self.fail_fast,
        )
        with progress_bar(len(candidates), "Caching") as bar:
            return pipeline.run_sync(candidates, on_progress=bar.update)
