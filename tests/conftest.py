import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from Utils.mod_data import ModEntry, ModList, ModUUID  # noqa: E402


def make_entry(uuid: str, active: bool = False, game: str = "warhammer3",
               packfile: str | None = None) -> ModEntry:
    return ModEntry(
        uuid=ModUUID(uuid),
        name=uuid.title(),
        active=active,
        category="foo",
        game=game,
        owned=True,
        packfile=packfile if packfile is not None else f"/mods/{uuid}.pack",
        short=f"the {uuid} mod",
    )


def make_list(*specs) -> ModList:
    """make_list(("one", False), ("two", True)) -> ModList."""
    return ModList([make_entry(u, a) for u, a in specs])


@pytest.fixture
def data_dir(tmp_path, monkeypatch) -> Path:
    d = tmp_path / "data"
    monkeypatch.setenv("GROTLOADA_DATA_DIR", str(d))
    monkeypatch.delenv("GROTLOADA_MOD_FILE", raising=False)
    return d
