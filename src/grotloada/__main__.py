"""
Run from src/ (or after pip install, as `grotloada`):
  python -m grotloada print                  # dump the mod file as the launcher sees it
  python -m grotloada current                # list active mods in load order
  python -m grotloada missing                # list mods whose .pack file is gone
  python -m grotloada save NAME              # snapshot the active mods as profile NAME
  python -m grotloada list                   # list saved profiles
  python -m grotloada show NAME              # show the mods in profile NAME
  python -m grotloada apply NAME             # apply profile NAME and write the mod file
  python -m grotloada toggle INDEX on|off    # flip one mod and write the mod file
  python -m grotloada backups                # list mod file backups
  python -m grotloada restore                # restore the newest backup
  python -m grotloada where                  # print the resolved mod file path
  python -m grotloada --mod-file PATH ...    # use PATH instead of searching
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Allow running as python -m grotloada from src/
if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from Utils.config_paths import ModFileLocator, get_data_dir, load_settings
from Utils.errors import GrotloadaError
from Utils.mod_data import ModList, ModProfile
from Utils.mod_file import dump_mod_file_text, load_mod_file, save_mod_file
from Utils.mod_file_backup import create_backup, list_backups, restore_backup
from Utils.profiles import ProfileStore

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="grotloada",
        description="Manage the Total War launcher mod list and saved mod profiles.",
    )
    ap.add_argument("--mod-file", type=Path, metavar="PATH",
                    help="Path to 20190104-moddata.dat (skips the search)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    sub.add_parser("print", help="Print the mod file as JSON")
    sub.add_parser("current", help="List active mods")
    sub.add_parser("missing", help="List mods whose packfile is missing")
    sub.add_parser("list", help="List saved profiles")
    sub.add_parser("backups", help="List mod file backups")
    sub.add_parser("restore", help="Restore the newest mod file backup")
    sub.add_parser("where", help="Print the mod file path")
    for name, text in (("save", "Save active mods as a profile"),
                       ("show", "Show a profile"),
                       ("apply", "Apply a profile to the mod file")):
        p = sub.add_parser(name, help=text)
        p.add_argument("name", help="Profile name")
    p = sub.add_parser("toggle", help="Activate or deactivate one mod")
    p.add_argument("index", type=int,
                   help="0-based position in the full mod list, i.e. the `order` shown by `print` minus 1")
    p.add_argument("state", choices=("on", "off"))
    return ap


def _print_numbered(names: list[str]) -> None:
    for i, n in enumerate(names):
        print(f"{i} - {n}")


def _write_back(mod_file: Path, mod_list: ModList, data_dir: Path) -> None:
    create_backup(mod_file, data_dir)
    save_mod_file(mod_file, mod_list)


def run(args: argparse.Namespace) -> int:
    data_dir = get_data_dir()
    settings = load_settings(data_dir)
    locator = ModFileLocator.from_settings(settings, args.mod_file)
    store = ProfileStore(data_dir)
    cmd = args.command

    # Commands that never read the mod file
    if cmd == "list":
        for name in store.list_profiles():
            print(name)
        return 0
    if cmd == "show":
        profile = store.load(args.name)
        print(f'Profile "{profile.name}"')
        _print_numbered([u.value for u in profile.active_mods])
        return 0
    if cmd == "backups":
        for ts, folder in list_backups(data_dir):
            print(f"{ts:%Y-%m-%d %H:%M:%S}  {folder}")
        return 0

    mod_file = locator.resolve()
    if cmd == "where":
        print(mod_file.resolve())
        return 0
    if cmd == "restore":
        backups = list_backups(data_dir)
        if not backups:
            print("No backups to restore", file=sys.stderr)
            return 1
        ts, folder = backups[0]
        restore_backup(folder, mod_file)
        print(f"Restored mod file from backup {ts:%Y-%m-%d %H:%M:%S}")
        return 0

    mod_list = load_mod_file(mod_file)
    if cmd == "print":
        print(dump_mod_file_text(mod_list))
    elif cmd == "current":
        _print_numbered([m.name for m in mod_list.get_active()])
    elif cmd == "missing":
        _print_numbered([m.name for m in mod_list.get_missing()])
    elif cmd == "save":
        store.save(ModProfile.from_mod_list(args.name, mod_list))
        print(f"Profile {args.name} saved.")
    elif cmd == "apply":
        profile = store.load(args.name)
        mod_list.apply_profile(profile)
        _write_back(mod_file, mod_list, data_dir)
        print(f"Profile {args.name} applied, {len(mod_list.get_active())} mods active.")
    elif cmd == "toggle":
        mod_list.set_mod_active_state(args.index, args.state == "on")
        _write_back(mod_file, mod_list, data_dir)
        print(f"{mod_list[args.index].name}: {args.state}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (GrotloadaError, IndexError) as e:
        log.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
