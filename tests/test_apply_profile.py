import random
from collections import Counter

import pytest

from conftest import make_entry, make_list
from Utils.mod_data import ModList, ModProfile, ModUUID, apply_profile


def _profile(*uuids, name="p"):
    return ModProfile(name=name, active_mods=tuple(ModUUID(u) for u in uuids))


def _ids(mods):
    return [m.uuid.value for m in mods]


def _flags(mods):
    return [m.active for m in mods]


def test_applying_profile_works():
    mods = make_list(("one", False), ("two", True))
    result = apply_profile(mods, _profile("one"))

    assert result[0].active
    assert result[0].name == "One"
    assert not result[1].active
    assert len(result) == 2


def test_profile_order_wins_and_untouched_mods_keep_their_order():
    mods = make_list(("a", True), ("b", False), ("c", True), ("d", False), ("e", True))
    result = apply_profile(mods, _profile("d", "b"))
    assert _ids(result) == ["d", "b", "a", "c", "e"]
    assert _flags(result) == [True, True, False, False, False]


def test_unknown_profile_uuids_are_skipped():
    mods = make_list(("a", False), ("b", False))
    result = apply_profile(mods, _profile("ghost", "b", "phantom"))
    assert _ids(result) == ["b", "a"]
    assert _flags(result) == [True, False]
    assert "ghost" not in _ids(result)


def test_profile_with_only_unknown_uuids_deactivates_everything():
    mods = make_list(("a", True), ("b", True), ("c", False))
    result = apply_profile(mods, _profile("x", "y"))
    expected = mods.copy()
    expected.deactivate_all()
    assert result == expected


def test_empty_profile_keeps_order_and_deactivates():
    mods = make_list(("c", True), ("a", False), ("b", True))
    result = apply_profile(mods, _profile())
    assert _ids(result) == ["c", "a", "b"]
    assert _flags(result) == [False, False, False]


def test_empty_list():
    assert len(apply_profile(ModList(), _profile("a"))) == 0


def test_input_list_is_not_modified():
    mods = make_list(("a", True), ("b", False))
    before = mods.copy()
    apply_profile(mods, _profile("b"))
    assert mods == before


def test_in_place_apply_matches_pure_apply():
    mods = make_list(("a", True), ("b", False), ("c", False))
    expected = apply_profile(mods, _profile("c", "b"))
    mods.apply_profile(_profile("c", "b"))
    assert mods == expected


def test_duplicate_uuids_are_never_dropped():
    mods = ModList([make_entry("a"), make_entry("b"), make_entry("a"), make_entry("c")])
    result = apply_profile(mods, _profile("a"))
    assert len(result) == 4
    assert Counter(_ids(result)) == Counter(_ids(mods))
    # first "a" placed by the profile, second one appended by the safety net
    assert _ids(result) == ["a", "a", "b", "c"]
    assert _flags(result) == [True, True, False, False]


def test_repeated_uuid_in_profile_only_places_once():
    mods = make_list(("a", False), ("b", False))
    result = apply_profile(mods, _profile("b", "b", "a"))
    assert _ids(result) == ["b", "a"]


@pytest.mark.parametrize("seed", range(20))
def test_random_lists_hold_all_invariants(seed):
    rng = random.Random(seed)
    ids = [f"mod{i}" for i in range(rng.randint(0, 15))]
    mods = ModList([make_entry(u, active=rng.random() < 0.5) for u in ids])
    pool = ids + [f"missing{i}" for i in range(3)]
    wanted = rng.sample(pool, rng.randint(0, len(pool)))
    profile = _profile(*wanted)

    result = apply_profile(mods, profile)

    # permutation
    assert sorted(_ids(result)) == sorted(ids)
    # activation
    for m in result:
        assert m.active == (m.uuid.value in wanted)
    # order: active block first, in profile order, then the rest in list order
    present = [u for u in wanted if u in ids]
    assert _ids(result)[:len(present)] == present
    assert _ids(result)[len(present):] == [u for u in ids if u not in wanted]
    # idempotence
    assert apply_profile(result, profile) == result
