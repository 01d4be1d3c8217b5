import pytest

from medialib.features.media_scanner.domain.exceptions import ScanAbortedError
from medialib.features.media_scanner.domain.interfaces import IMimeProbe
from medialib.features.media_scanner.domain.models import ScanRoot, ScanStats
from medialib.features.media_scanner.service.registrar import Registrar
from medialib.features.media_scanner.service.scanner import DirectoryScanner

BASE_URL = "https://example.com/uploads"


class LockedFileProbe(IMimeProbe):
    def probe(self, path):
        if path.name == "locked.jpg":
            raise PermissionError(13, "Permission denied", str(path))
        return "image/jpeg"


@pytest.fixture
def month_dir(uploads_dir):
    directory = uploads_dir / "2026" / "10"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def month_root(month_dir):
    return ScanRoot(base_dir=month_dir, base_url=BASE_URL, relative_prefix="2026/10")


@pytest.fixture
def mixed_folder(month_dir, make_image):
    """
    a.jpg (new), a-100x100.jpg (derived), b.JPG (new, uppercase),
    .hidden.jpg and notes.txt (never counted).
    """
    make_image(month_dir / "a.jpg")
    make_image(month_dir / "a-100x100.jpg")
    make_image(month_dir / "b.JPG")
    make_image(month_dir / ".hidden.jpg")
    (month_dir / "notes.txt").write_text("not an image")
    return month_dir


def test_narrow_scan_of_mixed_folder(memory_catalog, month_root, mixed_folder):
    stats = DirectoryScanner(memory_catalog).scan_directory(month_root)

    assert stats == ScanStats(scanned=3, imported=2, skipped_existing=0, skipped_intermediate=1, errors=0)
    assert sorted(memory_catalog.entries) == ["2026/10/a.jpg", "2026/10/b.JPG"]


def test_rescan_is_idempotent(memory_catalog, month_root, mixed_folder):
    scanner = DirectoryScanner(memory_catalog)
    first = scanner.scan_directory(month_root)

    second = scanner.scan_directory(month_root)

    assert second == ScanStats(scanned=3, imported=0, skipped_existing=2, skipped_intermediate=1, errors=0)
    assert second.skipped_existing == first.imported + first.skipped_existing
    assert len(memory_catalog.entries) == 2


def test_failed_insert_is_counted_and_walk_continues(memory_catalog, month_root, month_dir, make_image):
    for name in ("a.jpg", "b.jpg", "c.png"):
        make_image(month_dir / name)
    memory_catalog.fail_inserts_for.add("2026/10/b.jpg")

    stats = DirectoryScanner(memory_catalog).scan_directory(month_root)

    assert stats.errors == 1
    assert stats.imported == 2
    assert stats.scanned == 3
    assert "2026/10/c.png" in memory_catalog.entries


def test_hidden_files_are_invisible(memory_catalog, month_root, month_dir, make_image):
    make_image(month_dir / ".thumb.jpg")
    make_image(month_dir / ".cache-150x150.jpg")

    stats = DirectoryScanner(memory_catalog).scan_directory(month_root)

    assert stats == ScanStats.empty()


def test_non_image_content_only_counts_as_scanned(memory_catalog, month_root, month_dir):
    (month_dir / "renamed.png").write_text("plain text in disguise")

    stats = DirectoryScanner(memory_catalog).scan_directory(month_root)

    assert stats == ScanStats(scanned=1)
    assert memory_catalog.entries == {}


def test_narrow_scan_ignores_subdirectories(memory_catalog, month_root, month_dir, make_image):
    make_image(month_dir / "top.jpg")
    make_image(month_dir / "nested" / "below.jpg")

    stats = DirectoryScanner(memory_catalog).scan_directory(month_root)

    assert stats.scanned == 1
    assert list(memory_catalog.entries) == ["2026/10/top.jpg"]


def test_missing_directory_yields_empty_stats(memory_catalog, uploads_dir):
    root = ScanRoot(base_dir=uploads_dir / "1999" / "01", base_url=BASE_URL, relative_prefix="1999/01")

    assert DirectoryScanner(memory_catalog).scan_directory(root) == ScanStats.empty()


def test_deep_scan_prunes_reserved_directories(memory_catalog, uploads_dir, make_image):
    make_image(uploads_dir / "root.png")
    make_image(uploads_dir / "2025" / "12" / "winter.jpg")
    make_image(uploads_dir / "2025" / "12" / "winter-150x150.jpg")
    for reserved in ("cache", "elementor", "smush", "simple-uploads"):
        make_image(uploads_dir / reserved / "inside.jpg")
    make_image(uploads_dir / "2025" / "cache" / "nested-reserved.jpg")

    stats = DirectoryScanner(memory_catalog).scan_tree(ScanRoot(base_dir=uploads_dir, base_url=BASE_URL))

    assert stats == ScanStats(scanned=3, imported=2, skipped_intermediate=1)
    assert sorted(memory_catalog.entries) == ["2025/12/winter.jpg", "root.png"]


def test_deep_scan_builds_keys_and_urls_relative_to_base(memory_catalog, uploads_dir, make_image):
    make_image(uploads_dir / "2024" / "07" / "beach day.webp")

    DirectoryScanner(memory_catalog).scan_tree(ScanRoot(base_dir=uploads_dir, base_url=BASE_URL + "/"))

    entry = memory_catalog.entries["2024/07/beach day.webp"]
    assert entry.guid == "https://example.com/uploads/2024/07/beach%20day.webp"
    assert entry.mime_type == "image/webp"


def test_lookup_failure_aborts_with_partial_stats(memory_catalog, month_root, month_dir, make_image):
    for name in ("a.jpg", "b.jpg", "c.jpg"):
        make_image(month_dir / name)
    memory_catalog.unavailable_after = 1

    with pytest.raises(ScanAbortedError) as exc_info:
        DirectoryScanner(memory_catalog).scan_directory(month_root)

    partial = exc_info.value.partial_stats
    assert partial.imported == 1
    # b.jpg hit the outage mid-lookup, so it stays uncounted
    assert partial.scanned == 1
    assert partial.scanned == (
        partial.imported + partial.skipped_existing + partial.skipped_intermediate + partial.errors
    )
    # c.jpg was never reached
    assert list(memory_catalog.entries) == ["2026/10/a.jpg"]


def test_unreadable_file_is_counted_as_error(memory_catalog, month_root, month_dir, make_image):
    make_image(month_dir / "locked.jpg")
    make_image(month_dir / "open.jpg")
    scanner = DirectoryScanner(memory_catalog, registrar=Registrar(memory_catalog, mime_probe=LockedFileProbe()))

    stats = scanner.scan_directory(month_root)

    assert stats == ScanStats(scanned=2, imported=1, errors=1)
    assert list(memory_catalog.entries) == ["2026/10/open.jpg"]
