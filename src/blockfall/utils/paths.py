# src/blockfall/utils/paths.py
from __future__ import annotations

from pathlib import Path


def package_root() -> Path:
    """
    Return the installed `blockfall` package directory.
    """
    return Path(__file__).resolve().parents[1]


def assets_dir() -> Path:
    """
    Return package_root/assets (must exist).
    """
    p = package_root() / "assets"
    if not p.is_dir():
        raise FileNotFoundError(f"Assets directory not found: {p}")
    return p


def shapes_dir() -> Path:
    """
    Return package_root/assets/shapes (must exist).
    """
    p = assets_dir() / "shapes"
    if not p.is_dir():
        raise FileNotFoundError(f"Shapes directory not found: {p}")
    return p


def configs_dir() -> Path:
    p = assets_dir() / "configs"
    if not p.is_dir():
        raise FileNotFoundError(f"Configs directory not found: {p}")
    return p


def resolve_user_path(raw: str | Path, *, base: Path | None = None) -> Path:
    """
    Resolve a user-supplied file path.

    Tries, in order:
      - absolute path as written
      - relative to the current working directory
      - relative to `base` (typically the directory of the config file naming it)
    """
    s = str(raw).strip().strip('"').strip("'")
    if not s:
        raise ValueError("empty path")

    p_raw = Path(s).expanduser()
    if p_raw.is_absolute():
        if not p_raw.is_file():
            raise FileNotFoundError(f"path not found: {p_raw}")
        return p_raw.resolve()

    candidates: list[Path] = [p_raw.resolve()]
    if base is not None:
        candidates.append((Path(base) / p_raw).resolve())

    for cand in candidates:
        if cand.is_file():
            return cand

    tried = "\n".join(f"  - {c}" for c in candidates)
    raise FileNotFoundError(f"path not found. tried:\n{tried}")


__all__ = ["package_root", "assets_dir", "shapes_dir", "configs_dir", "resolve_user_path"]
