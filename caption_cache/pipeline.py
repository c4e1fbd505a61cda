import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from . import config
from .exceptions import ExtractionError
from .metadata.extract import MetadataExtractor
from .models import SubsetInfo
from .scanning.filesystem import ProgressCallback


@dataclass
class PipelineResult:
    cache: Dict[str, SubsetInfo] = field(default_factory=dict)
    failures: List[ExtractionError] = field(default_factory=list)


class ExtractionPipeline:
    """
    Runs MetadataExtractor over a stream of candidates with a bounded number
    of extractions in flight.

    Candidates are pulled from the input iterable only when a slot frees up,
    so a large candidate set never opens more than max_in_flight files at
    once. Results arrive in completion order and are folded into a dict.

    With fail_fast (the default) the first ExtractionError cancels all pending
    extractions and propagates; nothing is returned. Otherwise failures are
    collected next to the successful records.
    """

    def __init__(self,
                 extractor: Optional[MetadataExtractor] = None,
                 max_in_flight: int = config.DEFAULT_THREADS,
                 fail_fast: bool = True):
        if max_in_flight < 1:
            raise ValueError(f"max_in_flight must be at least 1, got {max_in_flight}")
        self.extractor = extractor or MetadataExtractor()
        self.max_in_flight = max_in_flight
        self.fail_fast = fail_fast

    def run_sync(self,
                 candidates: Iterable[Path],
                 on_progress: Optional[ProgressCallback] = None) -> PipelineResult:
        """Drives run() on a fresh event loop, torn down when the run ends or aborts."""
        return asyncio.run(self.run(candidates, on_progress))

    async def run(self,
                  candidates: Iterable[Path],
                  on_progress: Optional[ProgressCallback] = None) -> PipelineResult:
        result = PipelineResult()
        source = iter(candidates)
        pending: set = set()

        def refill():
            while len(pending) < self.max_in_flight:
                path = next(source, None)
                if path is None:
                    return
                pending.add(asyncio.ensure_future(self.extractor.extract_async(path)))

        refill()
        try:
            while pending:
                done, _ = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    pending.discard(task)
                    if on_progress:
                        on_progress(1)

                    try:
                        key, info = task.result()
                    except ExtractionError as e:
                        if self.fail_fast:
                            raise
                        logging.warning(str(e))
                        result.failures.append(e)
                        continue

                    result.cache[key] = info
                refill()
        finally:
            if pending:
                await _cancel_all(pending)

        return result


async def _cancel_all(tasks: set):
    for task in tasks:
        task.cancel()
    # Wait for cancellation to land; their outcomes are discarded
    await asyncio.gather(*tasks, return_exceptions=True)
