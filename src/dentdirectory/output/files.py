from __future__ import annotations

import shutil
from pathlib import Path


class FilesystemError(RuntimeError):
    pass


def ensure_dir(path: Path) -> Path:
    """mkdir -p; an existing directory is fine, anything else is fatal."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except FileExistsError as ex:
        # exist_ok only covers directories; a file in the way lands here
        raise FilesystemError(f"cannot create directory {path}: a file is in the way") from ex
    except OSError as ex:
        raise FilesystemError(f"cannot create directory {path}: {ex}") from ex
    return path


def read_template(template_dir: Path, name: str) -> str:
    p = template_dir / name
    try:
        return p.read_text(encoding="utf-8")
    except OSError as ex:
        raise FilesystemError(f"cannot read template {p}: {ex}") from ex


def write_page(directory: Path, html: str, name: str = "index.html") -> Path:
    ensure_dir(directory)
    target = directory / name
    try:
        target.write_text(html, encoding="utf-8")
    except OSError as ex:
        raise FilesystemError(f"cannot write {target}: {ex}") from ex
    return target


def copy_asset(source: Path, target: Path) -> Path:
    try:
        shutil.copyfile(source, target)
    except OSError as ex:
        raise FilesystemError(f"cannot copy {source} -> {target}: {ex}") from ex
    return target
