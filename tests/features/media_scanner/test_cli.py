from medialib.features.media_scanner.data.upload_locator import SettingsUploadLocator
from medialib.features.media_scanner.service import cli
from medialib.features.media_scanner.service.api import media_scanner


def test_cli_deep_scan_prints_summary(uploads_dir, make_image, monkeypatch, capsys):
    make_image(uploads_dir / "2023" / "05" / "cli-scan.png")
    make_image(uploads_dir / "smush" / "optimized.png")
    locator = SettingsUploadLocator(base_dir=uploads_dir, base_url="https://example.com/uploads")
    monkeypatch.setattr(media_scanner.orchestrator, "locator", locator)

    exit_code = cli.main(["--deep", "--log-level", "warning"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Deep scan (all uploads): scanned 1 file(s), imported 1" in out
