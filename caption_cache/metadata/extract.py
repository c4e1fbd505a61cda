import asyncio
import logging
from pathlib import Path
from typing import Tuple

from PIL import Image

from ..exceptions import ExtractionError
from ..models import SubsetInfo
from ..scanning.filesystem import caption_path_for

# Only headers are read, so the pixel count of an image is not bounded
Image.MAX_IMAGE_PIXELS = None


class MetadataExtractor:
    """
    Reads the cache record for one candidate image.

    Strategies:
      - Resolution: Pillow's lazy Image.open, which parses the container header
        and stops there. Pixel data is never decoded.
      - Caption: the sibling .txt file, read as UTF-8 and trimmed.
      - Key: the image path with symlinks resolved.
    """

    def extract(self, path: Path) -> Tuple[str, SubsetInfo]:
        """
        Returns (canonical_path, SubsetInfo) for a candidate image.

        Raises:
            ExtractionError: if any step fails. No partial record is produced.
        """
        try:
            resolution = self.read_resolution(path)
            caption = self.read_caption(path)
            key = self.canonical_key(path)
        except Exception as e:
            raise ExtractionError(path, e) from e

        return key, SubsetInfo(caption=caption, resolution=resolution)

    async def extract_async(self, path: Path) -> Tuple[str, SubsetInfo]:
        """
        Same as extract(), but the image and caption reads run concurrently in
        worker threads so the event loop can advance other extractions.
        """
        try:
            resolution, caption = await asyncio.gather(
                asyncio.to_thread(self.read_resolution, path),
                asyncio.to_thread(self.read_caption, path),
            )
            key = await asyncio.to_thread(self.canonical_key, path)
        except Exception as e:
            raise ExtractionError(path, e) from e

        return key, SubsetInfo(caption=caption, resolution=resolution)

    def read_resolution(self, path: Path) -> Tuple[int, int]:
        # Image.open is lazy: only the header is read until load() is called
        with Image.open(path) as im:
            width, height = im.size
        logging.debug(f"{path}: {width}x{height} ({im.format})")
        return width, height

    def read_caption(self, path: Path) -> str:
        # Strict decoding: a caption that is not valid UTF-8 fails the extraction
        return caption_path_for(path).read_text(encoding="utf-8").strip()

    def canonical_key(self, path: Path) -> str:
        return str(path.resolve(strict=True))
