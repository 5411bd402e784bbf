from Utils.steam_finder import find_prefix, find_steam_libraries, parse_vdf_libraries


def _write_vdf(steam_root, *libraries):
    (steam_root / "steamapps").mkdir(parents=True, exist_ok=True)
    body = "".join(f'  "{i}"\n  {{\n    "path"    "{p}"\n  }}\n' for i, p in enumerate(libraries))
    (steam_root / "steamapps" / "libraryfolders.vdf").write_text(
        f'"libraryfolders"\n{{\n{body}}}\n', encoding="utf-8"
    )


def test_parse_vdf_skips_missing_libraries(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    _write_vdf(tmp_path, real, tmp_path / "gone")
    assert parse_vdf_libraries(tmp_path / "steamapps" / "libraryfolders.vdf") == [real]


def test_parse_vdf_unreadable(tmp_path):
    assert parse_vdf_libraries(tmp_path / "missing.vdf") == []


def test_libraries_are_deduplicated(tmp_path):
    steam = tmp_path / ".local" / "share" / "Steam"
    _write_vdf(steam, steam)
    assert find_steam_libraries(tmp_path) == [steam]


def test_find_prefix(tmp_path):
    steam = tmp_path / ".steam" / "steam"
    lib = tmp_path / "lib"
    _write_vdf(steam, lib)
    pfx = lib / "steamapps" / "compatdata" / "1142710" / "pfx"
    pfx.mkdir(parents=True)
    assert find_prefix("1142710", tmp_path) == pfx
    assert find_prefix("999", tmp_path) is None
    assert find_prefix("", tmp_path) is None
