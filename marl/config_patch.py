"""Writes the selected ARL into third-party downloader configs."""

from __future__ import annotations

import logging
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import InlineTable, Table

from marl.models import Record
from marl.pipeline.io import read_text, write_text

logger = logging.getLogger(__name__)

STREAMRIP_CONFIG_NAME = "config.toml"


class ConfigPatchError(ValueError):
    pass


def resolve_config_file(path: Path, filename: str = STREAMRIP_CONFIG_NAME) -> Path:
    """Accept either the config file itself or the directory holding it."""
    if path.is_dir():
        path = path / filename
    if not path.is_file():
        raise ConfigPatchError(f"Config file does not exist: {path}")
    return path


def patch_streamrip(config_path: Path, record: Record) -> Path:
    """Set ``[deezer] arl`` in a streamrip config, preserving everything else.

    Returns:
        The config file that was written.
    """
    config_file = resolve_config_file(config_path)
    try:
        document = tomlkit.parse(read_text(config_file))
    except TOMLKitError as e:
        raise ConfigPatchError(f"Could not parse {config_file}: {e}") from e

    deezer = document.get("deezer")
    if not isinstance(deezer, (Table, InlineTable)):
        raise ConfigPatchError("config file does not contain deezer table")

    deezer["arl"] = record.value
    write_text(config_file, tomlkit.dumps(document))
    logger.info(f"Wrote {record.region} ARL {record.masked_value} to {config_file}")
    return config_file
