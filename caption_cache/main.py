import argparse
import logging
import sys
from pathlib import Path

from .core import CaptionCacheApp
from .exceptions import CaptionCacheError, RootNotFoundError
from . import config

def setup_logging(verbose: bool):
    """Sets up console logging on stdout."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Pillow logs every plugin it tries at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)

def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number

def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="caption-cache",
        description="Cache the resolution and caption of every captioned image in a directory.",
    )

    p.add_argument("input_dir", type=Path, help="The input directory to search for images")

    p.add_argument("-t", "--threads", type=positive_int, default=config.DEFAULT_THREADS,
                   help=f"Max concurrent workers for filtering and extraction (default: {config.DEFAULT_THREADS})")
    p.add_argument("--flat", action="store_true", help="Only look at direct children of the input directory")
    p.add_argument("--keep-going", action="store_true",
                   help="Skip unreadable images and still write the cache (default: abort on first error)")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    app = CaptionCacheApp(
        threads=args.threads,
        recursive=not args.flat,
        fail_fast=not args.keep_going,
    )

    try:
        app.build(args.input_dir)
    except RootNotFoundError as e:
        # Nothing to do is not an error
        logging.info(str(e))
        return 0
    except CaptionCacheError as e:
        logging.error(str(e))
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except Exception:
        logging.exception("Fatal error while building the metadata cache.")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
