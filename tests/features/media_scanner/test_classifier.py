import pytest

from medialib.features.media_scanner.data.classifier import PathClassifier
from medialib.features.media_scanner.data.ignore_rules import PruneRules
from pathlib import Path


@pytest.mark.parametrize("name", [
    "photo-150x150.jpg",
    "photo-1024x768.JPEG",
    "my-holiday-pic-300x200.png",
    "a-1x1.gif",
    "banner-1200x630.webp",
    "scan-800x600.bmp",
    "scan-800x600.tif",
    "scan-800x600.TIFF",
    "PHOTO-150X150.JPG",
])
def test_intermediate_variants_are_detected(name):
    assert PathClassifier.is_intermediate_variant(name)


@pytest.mark.parametrize("name", [
    "photo.jpg",
    "photo-abcxdef.jpg",
    "photo-150x.jpg",
    "photo-x150.jpg",
    "-150x150.jpg",          # needs at least one character before the hyphen
    "photo150x150.jpg",
    "photo-150x150.txt",
    "photo-150x150.jpg.bak",
    "photo-150x150.svg",
])
def test_originals_are_not_intermediate(name):
    assert not PathClassifier.is_intermediate_variant(name)


@pytest.mark.parametrize("name", [
    "a.jpg", "a.JPG", "a.jpeg", "a.png", "a.gif", "a.webp", "a.bmp", "a.tif", "a.TIFF",
])
def test_allowed_extensions(name):
    assert PathClassifier.is_candidate_extension(name)


@pytest.mark.parametrize("name", [
    "notes.txt", "movie.mp4", "vector.svg", "archive.jpg.zip", "noextension", "photo.",
])
def test_other_extensions_are_excluded(name):
    assert not PathClassifier.is_candidate_extension(name)


def test_hidden_files():
    assert PathClassifier.is_hidden(".hidden.jpg")
    assert PathClassifier.is_hidden(".DS_Store")
    assert not PathClassifier.is_hidden("visible.jpg")


def test_prune_rules_reject_reserved_directories():
    rules = PruneRules()

    for name in ("cache", "elementor", "smush", "simple-uploads"):
        assert rules(Path("/srv/uploads") / name) is False

    assert rules(Path("/srv/uploads/2026")) is True
    assert rules(Path("/srv/uploads/caches")) is True


def test_prune_rules_can_be_extended():
    rules = PruneRules().extended("backups")

    assert rules(Path("backups")) is False
    assert rules(Path("cache")) is False
    assert rules(Path("2026")) is True
