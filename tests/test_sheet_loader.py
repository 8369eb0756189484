"""Tests for sprite sheet discovery."""

import json

import pytest

from spritesheet_exporter.discovery import find_atlases, load_sheet
from spritesheet_exporter.errors import SheetFormatError


def _write_json(path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


HASH_SHEET = {
    "frames": {
        "hero_idle.png": {"frame": {"x": 0, "y": 0, "w": 16, "h": 24}, "rotated": False},
        "sub/hero_run.png": {
            "frame": {"x": 16, "y": 0, "w": 20, "h": 10},
            "rotated": True,
            "trimmed": False,
        },
    },
    "meta": {"image": "hero_sheet.png", "size": {"w": 64, "h": 64}},
}


def test_load_hash_sheet(tmp_path):
    sheet_path = _write_json(tmp_path / "Characters" / "hero.json", HASH_SHEET)

    atlas = load_sheet(sheet_path)

    assert atlas.name == "hero"
    assert atlas.texture.path == tmp_path / "Characters" / "hero_sheet.png"
    assert atlas.texture.texture_name == "hero_sheet.png"
    assert atlas.texture.identifier == "hero_sheet"
    assert [region.name for region in atlas.regions] == ["hero_idle", "sub/hero_run"]

    idle, run = atlas.regions
    assert (idle.origin, idle.size, idle.rotated) == ((0, 0), (16, 24), False)
    # Rotated frames list their unrotated size; the packed size is swapped.
    assert (run.origin, run.size, run.rotated) == ((16, 0), (10, 20), True)


def test_load_array_sheet(tmp_path):
    sheet_path = _write_json(
        tmp_path / "items.json",
        {
            "frames": [
                {"filename": "sword", "frame": {"x": 1, "y": 2, "w": 3, "h": 4}},
                {"filename": "shield.png", "frame": {"x": 5, "y": 6, "w": 7, "h": 8}},
            ],
            "meta": {"image": "items.png"},
        },
    )

    atlas = load_sheet(sheet_path)

    assert [(r.name, r.origin, r.size) for r in atlas.regions] == [
        ("sword", (1, 2), (3, 4)),
        ("shield", (5, 6), (7, 8)),
    ]


def test_array_frame_without_filename_is_rejected(tmp_path):
    sheet_path = _write_json(
        tmp_path / "items.json",
        {"frames": [{"frame": {"x": 0, "y": 0, "w": 1, "h": 1}}], "meta": {"image": "a.png"}},
    )

    with pytest.raises(SheetFormatError):
        load_sheet(sheet_path)


def test_non_sheet_json_is_rejected(tmp_path):
    sheet_path = _write_json(tmp_path / "settings.json", {"volume": 3})

    with pytest.raises(SheetFormatError):
        load_sheet(sheet_path)


def test_find_atlases_skips_other_files(tmp_path):
    _write_json(tmp_path / "b" / "hero.json", HASH_SHEET)
    _write_json(tmp_path / "a.json", dict(HASH_SHEET, meta={"image": "a.png"}))
    _write_json(tmp_path / "settings.json", {"volume": 3})
    _write_json(tmp_path / "broken_sheet.json", {"frames": {}, "meta": {}})
    (tmp_path / "garbage.json").write_text("{not json", encoding="utf-8")

    atlases = find_atlases(tmp_path)

    assert [atlas.name for atlas in atlases] == ["a", "hero"]


def test_find_atlases_non_recursive(tmp_path):
    _write_json(tmp_path / "b" / "hero.json", HASH_SHEET)
    _write_json(tmp_path / "top.json", HASH_SHEET)

    atlases = find_atlases(tmp_path, recursive=False)

    assert [atlas.name for atlas in atlases] == ["top"]


def test_find_atlases_missing_root(tmp_path):
    assert find_atlases(tmp_path / "nope") == []


def test_sprite_names_keep_sub_folders(tmp_path):
    sheet_path = _write_json(
        tmp_path / "anim.json",
        {
            "frames": {
                "walk/0.png": {"frame": {"x": 0, "y": 0, "w": 1, "h": 1}},
                "run/0.png": {"frame": {"x": 1, "y": 0, "w": 1, "h": 1}},
                "../escape/./1.png": {"frame": {"x": 2, "y": 0, "w": 1, "h": 1}},
            },
            "meta": {"image": "anim.png"},
        },
    )

    atlas = load_sheet(sheet_path)

    assert [region.name for region in atlas.regions] == [
        "walk/0",
        "run/0",
        "escape/1",
    ]
    assert atlas.source_path == sheet_path
