import pytest

from conftest import make_entry, make_list
from Utils.mod_data import ModList, ModProfile, ModUUID


def test_get_active_keeps_list_order():
    mods = make_list(("a", True), ("b", False), ("c", True), ("d", True))
    assert [m.uuid.value for m in mods.get_active()] == ["a", "c", "d"]


def test_deactivate_all():
    mods = make_list(("a", True), ("b", True), ("c", False))
    mods.deactivate_all()
    assert not any(m.active for m in mods)
    assert mods.uuids() == [ModUUID("a"), ModUUID("b"), ModUUID("c")]


def test_deactivate_all_empty_list():
    mods = ModList()
    mods.deactivate_all()
    assert len(mods) == 0


def test_set_mod_active_state():
    mods = make_list(("a", False), ("b", False))
    mods.set_mod_active_state(1, True)
    assert [m.active for m in mods] == [False, True]
    mods.set_mod_active_state(1, False)
    assert [m.active for m in mods] == [False, False]


@pytest.mark.parametrize("index", [2, 3, 100, -1])
def test_set_mod_active_state_out_of_range(index):
    mods = make_list(("a", True), ("b", False))
    with pytest.raises(IndexError):
        mods.set_mod_active_state(index, True)
    assert [m.active for m in mods] == [True, False]


def test_last_index_is_in_range():
    mods = make_list(("a", False), ("b", False), ("c", False))
    mods.set_mod_active_state(len(mods) - 1, True)
    assert mods[2].active


def test_get_missing_uses_exists_callable():
    mods = ModList([
        make_entry("here", packfile="/mods/here.pack"),
        make_entry("gone", packfile="/mods/gone.pack"),
        make_entry("also_gone", packfile="/mods/also_gone.pack"),
    ])
    present = {"/mods/here.pack"}
    missing = mods.get_missing(exists=lambda p: p in present)
    assert [m.uuid.value for m in missing] == ["gone", "also_gone"]


def test_get_missing_strips_wine_drive_prefix():
    mods = ModList([make_entry("wine", packfile="Z:/home/me/wine.pack")])
    seen = []

    def exists(path):
        seen.append(path)
        return True

    assert mods.get_missing(exists=exists) == []
    assert seen == ["/home/me/wine.pack"]


def test_only_wine_prefix_is_rewritten():
    assert make_entry("c", packfile="C:/games/c.pack").local_packfile == "C:/games/c.pack"
    assert make_entry("z", packfile="Z:/x.pack").local_packfile == "/x.pack"
    assert make_entry("p", packfile="/plain.pack").local_packfile == "/plain.pack"


def test_get_missing_on_real_files(tmp_path):
    real = tmp_path / "real.pack"
    real.write_bytes(b"")
    mods = ModList([
        make_entry("real", packfile=str(real)),
        make_entry("fake", packfile=str(tmp_path / "fake.pack")),
    ])
    assert [m.uuid.value for m in mods.get_missing()] == ["fake"]


def test_for_game_keeps_full_list_indices():
    mods = ModList([
        make_entry("a", game="warhammer2"),
        make_entry("b", game="warhammer3"),
        make_entry("c", game="warhammer3"),
    ])
    assert [(i, m.uuid.value) for i, m in mods.for_game("warhammer3")] == [(1, "b"), (2, "c")]
    assert len(mods.for_game(None)) == 3


def test_profile_snapshot_matches_active_entries():
    mods = make_list(("a", False), ("b", True), ("c", False), ("d", True))
    profile = ModProfile.from_mod_list("snap", mods)
    assert profile.name == "snap"
    assert profile.active_mods == tuple(m.uuid for m in mods.get_active())
    assert profile.active_mods == (ModUUID("b"), ModUUID("d"))


def test_profile_snapshot_of_inactive_list_is_empty():
    profile = ModProfile.from_mod_list("none", make_list(("a", False)))
    assert profile.active_mods == ()


def test_profile_is_immutable():
    profile = ModProfile("p", [ModUUID("a")])
    assert isinstance(profile.active_mods, tuple)
    with pytest.raises(AttributeError):
        profile.name = "other"
