"""Tests for the console command surface."""

import json

from PIL import Image

from spritesheet_exporter.cli import execute_command, main


def _make_content(root, image_name="sheet.png", frame_x=0):
    root.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (4, 4), (1, 2, 3, 255)).save(root / image_name)
    sheet = {
        "frames": {"tile.png": {"frame": {"x": frame_x, "y": 0, "w": 2, "h": 2}}},
        "meta": {"image": image_name},
    }
    sheet_path = root / "sheet.json"
    sheet_path.write_text(json.dumps(sheet), encoding="utf-8")
    return sheet_path


def test_unknown_command_is_not_handled(tmp_path):
    assert execute_command("Nonsense", content_root=tmp_path) is False
    assert execute_command("", content_root=tmp_path) is False


def test_export_all_command(tmp_path, capsys):
    content = tmp_path / "Content"
    _make_content(content)
    output = tmp_path / "out dir"

    assert execute_command(f'ExportAllAtlas "{output}"', content_root=content) is True

    assert (output / "sheet" / "sheet.png").is_file()
    assert (output / "sheet" / "tile.png").is_file()
    assert "Export finished" in capsys.readouterr().out


def test_export_one_command(tmp_path):
    sheet_path = _make_content(tmp_path / "Content")
    output = tmp_path / "out"

    assert execute_command(f"ExportAtlas {sheet_path} {output}") is True

    assert (output / "sheet" / "tile.png").is_file()


def test_main_exit_status(tmp_path, capsys):
    good = tmp_path / "good"
    _make_content(good)
    assert main([f"--content-root={good}", f"--output={tmp_path / 'out'}"]) == 0

    bad = tmp_path / "bad"
    _make_content(bad, frame_x=3)
    status = main(
        [f"--content-root={bad}", f"--output={tmp_path / 'out2'}", "--log-level=error"]
    )
    assert status == 1
    assert "Export failed" in capsys.readouterr().out


def test_main_export_atlas_with_unreadable_sheet(tmp_path):
    missing = tmp_path / "missing.json"
    assert main(["ExportAtlas", str(missing), f"--output={tmp_path}"]) == 1
