import json
from pathlib import Path

import pytest

from Utils.config_paths import (
    ModFileLocator,
    Settings,
    default_mod_file_candidates,
    get_data_dir,
    load_settings,
    save_settings,
)
from Utils.errors import NotFoundError


def test_data_dir_env_override(data_dir):
    assert get_data_dir() == data_dir
    assert data_dir.is_dir()


def test_override_is_used_without_existence_check():
    locator = ModFileLocator(override="/does/not/exist.dat",
                             candidates=[Path("a")], exists=lambda p: True)
    assert locator.resolve() == Path("/does/not/exist.dat")


def test_first_existing_candidate_wins():
    cands = [Path("one"), Path("two"), Path("three")]
    locator = ModFileLocator(candidates=cands, exists=lambda p: p.name != "one")
    assert locator.resolve() == Path("two")


def test_no_candidate_exists():
    locator = ModFileLocator(candidates=[Path("one")], exists=lambda p: False)
    with pytest.raises(NotFoundError, match="Could not find mod file"):
        locator.resolve()


def test_from_settings_precedence(monkeypatch):
    settings = Settings(mod_file_path="/from/settings.dat")
    monkeypatch.delenv("GROTLOADA_MOD_FILE", raising=False)
    assert ModFileLocator.from_settings(settings).override == Path("/from/settings.dat")

    monkeypatch.setenv("GROTLOADA_MOD_FILE", "/from/env.dat")
    assert ModFileLocator.from_settings(settings).override == Path("/from/env.dat")
    assert ModFileLocator.from_settings(settings, "/from/cli.dat").override == Path("/from/cli.dat")


def test_linux_candidates(tmp_path):
    cands = default_mod_file_candidates(platform="linux", home=tmp_path)
    assert cands[0] == Path("20190104-moddata.dat")
    assert (
        tmp_path / ".steam" / "steam" / "steamapps" / "compatdata" / "1142710" / "pfx"
        / "drive_c" / "users" / "steamuser" / "AppData" / "Roaming"
        / "The Creative Assembly" / "Launcher" / "20190104-moddata.dat"
    ) in cands
    assert any("SteamLibrary" in str(p) for p in cands)


def test_linux_candidates_include_discovered_prefix(tmp_path):
    lib = tmp_path / "mnt" / "games"
    steam = tmp_path / ".local" / "share" / "Steam"
    (steam / "steamapps").mkdir(parents=True)
    (steam / "steamapps" / "libraryfolders.vdf").write_text(
        f'"libraryfolders"\n{{\n  "1"\n  {{\n    "path"    "{lib}"\n  }}\n}}\n',
        encoding="utf-8",
    )
    pfx = lib / "steamapps" / "compatdata" / "1142710" / "pfx"
    pfx.mkdir(parents=True)

    cands = default_mod_file_candidates(platform="linux", home=tmp_path)
    assert cands[-1].is_relative_to(pfx)
    assert cands[-1].name == "20190104-moddata.dat"


def test_other_platforms_only_check_cwd(tmp_path):
    assert default_mod_file_candidates(platform="darwin", home=tmp_path) == [
        Path("20190104-moddata.dat")
    ]


def test_settings_defaults_when_missing(tmp_path):
    assert load_settings(tmp_path) == Settings()


def test_settings_round_trip(tmp_path):
    settings = Settings(mod_file_path="/x.dat", game_filter=None)
    save_settings(settings, tmp_path)
    assert json.loads((tmp_path / "settings.json").read_text()) == {
        "mod_file_path": "/x.dat", "game_filter": None,
    }
    assert load_settings(tmp_path) == settings


def test_corrupt_settings_fall_back_to_defaults(tmp_path, caplog):
    (tmp_path / "settings.json").write_text("{nope", encoding="utf-8")
    assert load_settings(tmp_path) == Settings()
    assert any("unreadable settings" in r.message for r in caplog.records)
