import json
import os
from pathlib import Path

import pytest

pytest.importorskip("pyvips")

from sprite_sheet.main import EXIT_FAILURE, EXIT_OK, EXIT_PARTIAL, build_parser, main


@pytest.fixture(autouse=True)
def _isolate_log_env(monkeypatch):
    # Registered so env changes made by main() are undone after each test.
    monkeypatch.setenv("SPRITE_SHEET_LOG_LEVEL", "")
    monkeypatch.setenv("SPRITE_SHEET_LOG_CATS", "")


def _fill(make_png, folder: Path, count: int = 3, size=(10, 10)) -> None:
    for i in range(count):
        make_png(f"{i}.png", size, folder=folder)


def test_success_writes_sheet(make_png, sprite_dir, tmp_path):
    _fill(make_png, sprite_dir)
    out = tmp_path / "out.png"
    assert main(["--input-path", str(sprite_dir), "--output-path", str(out)]) == EXIT_OK
    assert out.exists()


def test_missing_input_path_fails(tmp_path):
    assert main(["--output-path", str(tmp_path / "out.png")]) == EXIT_FAILURE


def test_missing_directory_fails(tmp_path):
    out = tmp_path / "out.png"
    assert main(["--input-path", str(tmp_path / "missing"), "--output-path", str(out)]) == EXIT_FAILURE
    assert not out.exists()


def test_invalid_crop_fails_before_decoding(sprite_dir, tmp_path):
    # The directory holds an undecodable file; the crop error must win.
    (sprite_dir / "bad.png").write_bytes(b"junk")
    out = tmp_path / "out.png"
    assert main(["--input-path", str(sprite_dir), "--output-path", str(out), "--crop", "abc"]) == EXIT_FAILURE
    assert not out.exists()


def test_invalid_scale_is_partial_success(make_png, sprite_dir, tmp_path):
    _fill(make_png, sprite_dir)
    out = tmp_path / "out.png"
    code = main(["--input-path", str(sprite_dir), "--output-path", str(out), "--scale", "zero"])
    assert code == EXIT_PARTIAL
    assert out.exists()


def test_config_file_supplies_defaults(make_png, sprite_dir, tmp_path):
    make_png("a.png", (10, 10), folder=sprite_dir)
    make_png("b.png", (12, 8), folder=sprite_dir)
    out = tmp_path / "from_config.png"
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"input_path": str(sprite_dir), "output_path": str(out), "crop": "smallest"}))

    assert main(["--config", str(config)]) == EXIT_OK
    assert out.exists()


def test_cli_flags_override_config(make_png, sprite_dir, tmp_path):
    make_png("a.png", (10, 10), folder=sprite_dir)
    make_png("b.png", (12, 8), folder=sprite_dir)
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"input_path": str(sprite_dir), "trim": True}))
    out = tmp_path / "out.png"

    # Mismatched sizes are only rejected with trimming switched off.
    assert main(["--config", str(config), "--output-path", str(out), "--no-trim"]) == EXIT_FAILURE
    assert main(["--config", str(config), "--output-path", str(out)]) == EXIT_OK


def test_log_level_flag_sets_env(make_png, sprite_dir, tmp_path):
    _fill(make_png, sprite_dir, count=1)
    main(["--log-level", "debug", "--input-path", str(sprite_dir), "--output-path", str(tmp_path / "o.png")])
    assert os.environ["SPRITE_SHEET_LOG_LEVEL"] == "debug"


def test_parser_defaults():
    args = build_parser().parse_args(["--input-path", "x"])
    assert args.trim is None
    assert args.crop is None
    assert args.scale is None
