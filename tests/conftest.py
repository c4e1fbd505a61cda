import pytest
from pathlib import Path
from PIL import Image


def make_image(path: Path, size=(64, 48), fmt=None) -> Path:
    """Writes a small solid-colour image; the format follows the suffix unless given."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with Image.new("RGB", size, color="red") as im:
        im.save(path, format=fmt)
    return path


def make_captioned_image(path: Path, caption: str = "a cat", size=(64, 48)) -> Path:
    make_image(path, size=size, fmt="PNG")
    path.with_suffix(".txt").write_text(caption, encoding="utf-8")
    return path


@pytest.fixture
def dataset(tmp_path):
    """
    Returns (root, expected) for a small tree of captioned images.

    expected maps each captioned image path to (caption, (width, height)).
    A few decoys sit alongside: an image without caption, a caption without
    image and an unsupported extension with a caption.
    """
    root = tmp_path / "subset"
    root.mkdir()

    expected = {}
    for name, caption, size in [
        ("cat.png", "  a cat\n", (64, 48)),
        ("dog.jpg", "a dog", (32, 16)),
        ("bird.jpeg", "a bird", (10, 20)),
        ("fish.webp", "a fish", (7, 9)),
        ("nested/deep/fox.png", "a fox\n\n", (5, 3)),
    ]:
        path = root / name
        make_image(path, size=size)
        path.with_suffix(".txt").write_text(caption, encoding="utf-8")
        expected[path] = (caption.strip(), size)

    make_image(root / "uncaptioned.png")
    (root / "orphan.txt").write_text("no image", encoding="utf-8")
    make_image(root / "photo.bmp")
    (root / "photo.txt").write_text("bmp is unsupported", encoding="utf-8")

    return root, expected
