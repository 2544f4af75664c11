## LOD configuration loading for ringCAD
## Copyright (c) 2025 ringCAD contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""LOD configuration loading.

The LOD parameters are the only tunable surface of ringCAD.  They can
be supplied in code (``LODConfig(...)``) or read from a YAML mapping
whose keys use either the canvas-side camelCase spelling or the
Python snake_case spelling::

    minZoom: 0.2
    maxZoom: 5.0
    minSegments: 4
    maxSegments: 64
    smoothingFactor: 0.7

Keys that are left out keep their default values.

Environment Variables:
    RINGCAD_LOD_CONFIG: path to a YAML file used when ``load_lod_config``
                        is called without an explicit path.

Search order when no path is given:
    1. ``$RINGCAD_LOD_CONFIG``
    2. ``~/.config/ringcad/lod.yaml``
    3. built-in defaults
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ringcad.lod import DEFAULT_LOD_CONFIG, LODConfig

logger = logging.getLogger(__name__)

RINGCAD_LOD_CONFIG = "RINGCAD_LOD_CONFIG"

_USER_CONFIG = Path("~/.config/ringcad/lod.yaml")

_CAMEL_TO_FIELD = {
    "minZoom": "min_zoom",
    "maxZoom": "max_zoom",
    "minSegments": "min_segments",
    "maxSegments": "max_segments",
    "smoothingFactor": "smoothing_factor",
}
_FIELD_TO_CAMEL = {v: k for k, v in _CAMEL_TO_FIELD.items()}
_INT_FIELDS = {"min_segments", "max_segments"}


def lod_config_from_mapping(data: Optional[Mapping[str, Any]],
                            base: LODConfig = DEFAULT_LOD_CONFIG) -> LODConfig:
    """Merge ``data`` over ``base`` and return the resulting config."""

    if not data:
        return base
    if not isinstance(data, Mapping):
        raise ValueError(f"LOD config must be a mapping, got {type(data).__name__}")

    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        name = _CAMEL_TO_FIELD.get(key, key)
        if name not in _FIELD_TO_CAMEL:
            raise ValueError(f"unknown LOD config key: {key!r}")
        if isinstance(value, bool):
            raise ValueError(f"bad value for LOD config key {key!r}: {value!r}")
        try:
            overrides[name] = _as_int(value) if name in _INT_FIELDS else float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"bad value for LOD config key {key!r}: {value!r}") from exc
    return base.replace(**overrides)


def _as_int(value: Any) -> int:
    # accepts 4, 4.0 and "4"; rejects 4.7
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"not a whole number: {value!r}")
    return int(number)


def lod_config_to_mapping(config: LODConfig) -> Dict[str, Any]:
    return {camel: getattr(config, name) for name, camel in _FIELD_TO_CAMEL.items()}


def _default_path() -> Optional[Path]:
    env_path = os.environ.get(RINGCAD_LOD_CONFIG)
    if env_path:
        return Path(env_path).expanduser()
    user_path = _USER_CONFIG.expanduser()
    if user_path.is_file():
        return user_path
    return None


def load_lod_config(path: Union[str, Path, None] = None) -> LODConfig:
    """Read an LOD config from YAML, falling back to the defaults.

    An explicit ``path`` (or one named by ``$RINGCAD_LOD_CONFIG``) that
    does not exist raises ``FileNotFoundError``.
    """

    cfg_path = Path(path).expanduser() if path is not None else _default_path()
    if cfg_path is None:
        return DEFAULT_LOD_CONFIG

    logger.debug("loading LOD config from %s", cfg_path)
    with cfg_path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"could not parse LOD config {cfg_path}: {exc}") from exc
    config = lod_config_from_mapping(data)
    logger.info("LOD config loaded from %s", cfg_path)
    return config


def dump_lod_config(config: LODConfig, path: Union[str, Path]) -> None:
    """Write ``config`` as camelCase YAML."""

    out = Path(path)
    with out.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(lod_config_to_mapping(config), fp, sort_keys=False)


__all__ = [
    "RINGCAD_LOD_CONFIG",
    "dump_lod_config",
    "load_lod_config",
    "lod_config_from_mapping",
    "lod_config_to_mapping",
]
