"""Copy template files into a package directory."""

from __future__ import annotations

import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ts_scaffold.output import info

# Stored names starting with this token are written with a leading "." instead.
# Packaging drops hidden files, so templates such as .gitignore ship as dotgitignore.
DOT_TOKEN = "dot"


def destination_name(name: str) -> str:
    if name.startswith(DOT_TOKEN):
        return "." + name[len(DOT_TOKEN) :]
    return name


def template_files(directory: Path) -> list[Path]:
    """Regular files directly inside ``directory``. Subdirectories are skipped."""
    return sorted(path for path in directory.iterdir() if path.is_file())


def copy_files(from_dir: Path, to_dir: Path) -> list[Path]:
    """Copy every file of ``from_dir`` into ``to_dir`` and return the written paths.

    Not transactional: when one copy fails the others may already be on disk.
    """
    info(f"copying files from {from_dir} to {to_dir}")

    def copy_one(src: Path) -> Path:
        dest = to_dir / destination_name(src.name)
        shutil.copyfile(src, dest)
        return dest

    with ThreadPoolExecutor() as pool:
        return list(pool.map(copy_one, template_files(from_dir)))
