"""
Settings loader (``ledger_config.loader``).

Responsibility
--------------
Reads the optional YAML settings file and the ``LEDGER_*`` environment
variables and merges them into one plain mapping.  Environment values win
over file values.  Parsing into ``LedgerSettings`` happens in
``ledger_config.get_settings()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* YAML document that is not a mapping  -> ``ValueError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import LedgerSettings

ENV_PREFIX = "LEDGER_"
CONFIG_PATH_ENV = "LEDGER_CONFIG"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top-level document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    # Settings may sit under a "ledger" section
    if isinstance(data.get("ledger"), dict):
        data = data["ledger"]
    return data


def env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect ``LEDGER_<FIELD>`` variables for every known settings field."""
    overrides = {}
    for f in fields(LedgerSettings):
        key = ENV_PREFIX + f.name.upper()
        if key in environ:
            overrides[f.name] = environ[key]
    return overrides


def load_raw_settings(
    path: Path | None,
    environ: Mapping[str, str],
) -> dict[str, Any]:
    """Merge file values and environment overrides (environment wins)."""
    if path is None and environ.get(CONFIG_PATH_ENV):
        path = Path(environ[CONFIG_PATH_ENV])

    raw: dict[str, Any] = {}
    if path is not None:
        raw.update(load_yaml_file(Path(path)))
    raw.update(env_overrides(environ))
    return raw
