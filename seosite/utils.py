from __future__ import annotations

import datetime as dt
import shutil
from pathlib import Path


class BuildError(Exception):
    """Fatal build precondition: unreadable template, unwritable output, bad config."""


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on", "si", "sí"}
    return False


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def parse_float(value: object, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return default


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return f"{base}/"
    return f"{base}/{path}"


def iso_day(value: dt.datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.date().isoformat()


def staging_dir_for(output_dir: Path) -> Path:
    return output_dir.with_name(f".{output_dir.name}.staging")


def prepare_staging(output_dir: Path, project_root: Path) -> Path:
    output_resolved = output_dir.resolve()
    root_resolved = project_root.resolve()
    if output_resolved == root_resolved:
        raise BuildError("Refusing to build into the project root.")
    staging = staging_dir_for(output_dir)
    try:
        if staging.exists():
            shutil.rmtree(staging)
        staging.mkdir(parents=True)
    except OSError as exc:
        raise BuildError(f"Output directory is not writable: {output_dir} ({exc})") from exc
    return staging


def discard_staging(staging: Path) -> None:
    shutil.rmtree(staging, ignore_errors=True)


def promote_staging(staging: Path, output_dir: Path, clean: bool = True) -> None:
    try:
        if output_dir.exists() and clean:
            shutil.rmtree(output_dir)
        if output_dir.exists():
            shutil.copytree(staging, output_dir, dirs_exist_ok=True)
            shutil.rmtree(staging)
        else:
            staging.rename(output_dir)
    except OSError as exc:
        raise BuildError(f"Could not write output directory {output_dir}: {exc}") from exc
