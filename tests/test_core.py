import pytest
from caption_cache.core import CaptionCacheApp
from caption_cache.cache import load_cache
from caption_cache.exceptions import ExtractionError, RootNotFoundError
from caption_cache.models import SubsetInfo
from caption_cache.scanning.filesystem import PathFilter
from caption_cache import config


def test_build_writes_cache_for_captioned_images(dataset):
    root, expected = dataset

    cache_path = CaptionCacheApp(threads=2).build(root)

    assert cache_path == root / config.CACHE_FILENAME
    assert load_cache(cache_path) == {
        str(path.resolve()): SubsetInfo(caption, size) for path, (caption, size) in expected.items()
    }


def test_build_is_idempotent(dataset):
    root, _ = dataset
    app = CaptionCacheApp(threads=3)

    first = app.build(root).read_bytes()
    second = app.build(root).read_bytes()

    assert first == second


def test_build_flat_skips_nested_images(dataset):
    root, expected = dataset

    cache = load_cache(CaptionCacheApp(recursive=False).build(root))

    assert len(cache) == len(expected) - 1
    assert not any("fox" in key for key in cache)


def test_missing_root_raises(tmp_path):
    with pytest.raises(RootNotFoundError):
        CaptionCacheApp().build(tmp_path / "missing")


def test_file_as_root_raises(tmp_path):
    not_a_dir = tmp_path / "file.png"
    not_a_dir.write_bytes(b"x")

    with pytest.raises(RootNotFoundError):
        CaptionCacheApp().build(not_a_dir)


def _delete_caption_after_filter(monkeypatch, victim_name):
    original = PathFilter.filter_entries

    def filter_then_delete(self, entries, on_progress=None):
        candidates = original(self, entries, on_progress)
        victim = next(p for p in candidates if p.name == victim_name)
        victim.with_suffix(".txt").unlink()
        return candidates

    monkeypatch.setattr(PathFilter, "filter_entries", filter_then_delete)


def test_caption_deleted_after_filter_aborts_without_cache(monkeypatch, dataset):
    root, _ = dataset
    _delete_caption_after_filter(monkeypatch, "dog.jpg")

    with pytest.raises(ExtractionError) as exc_info:
        CaptionCacheApp(threads=2).build(root)

    assert exc_info.value.path == root / "dog.jpg"
    assert not (root / config.CACHE_FILENAME).exists()


def test_keep_going_writes_successful_entries(monkeypatch, dataset):
    root, expected = dataset
    _delete_caption_after_filter(monkeypatch, "dog.jpg")

    cache = load_cache(CaptionCacheApp(threads=2, fail_fast=False).build(root))

    assert len(cache) == len(expected) - 1
    assert str((root / "dog.jpg").resolve()) not in cache
