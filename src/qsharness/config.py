# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Configuration management.

Configuration is read from environment variables once and cached as a
process-wide singleton. Pass an explicit :class:`Config` to
:func:`~qsharness.runner.run` to bypass the singleton for a single call.

Environment Variables
---------------------
QSHARNESS_ENGINE
    Engine name used when no engine is passed explicitly. Default ``qsharp``.
QSHARNESS_DEBUG
    Build interpreter contexts with debug instrumentation (stack traces).
    Default true.
QSHARNESS_SOURCE_NAME
    Virtual file name programs are labeled with. Default ``temp.qs``.
QSHARNESS_PACKAGE_PREFIX
    Package path prefix of the virtual source map. Default empty.
QSHARNESS_TARGET_PROFILE
    Engine target profile: ``unrestricted``, ``base`` or ``adaptive_ri``.
    Default ``unrestricted``.
QSHARNESS_ECHO_VALUE
    Write the program's returned value to the output channel. Default true.

Examples
--------
>>> from qsharness.config import Config, set_config
>>> set_config(Config(debug=False))
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass

from qsharness.sources import DEFAULT_SOURCE_NAME


logger = logging.getLogger(__name__)

TARGET_PROFILES: tuple[str, ...] = ("unrestricted", "base", "adaptive_ri")

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass
class Config:
    """
    Harness configuration.

    Parameters
    ----------
    engine : str
        Name of the default interpreter engine.
    debug : bool
        Whether contexts are built with debug instrumentation.
    source_name : str
        Synthetic file name of the single-file source map.
    package_prefix : str
        Package path prefix of the source map.
    target_profile : str
        Engine target profile.
    echo_value : bool
        Whether the final returned value is written to the output channel.
    """

    engine: str = "qsharp"
    debug: bool = True
    source_name: str = DEFAULT_SOURCE_NAME
    package_prefix: str = ""
    target_profile: str = "unrestricted"
    echo_value: bool = True

    def __post_init__(self) -> None:
        if self.target_profile not in TARGET_PROFILES:
            raise ValueError(
                f"target_profile must be one of {TARGET_PROFILES}, "
                f"got: {self.target_profile}"
            )
        if not self.source_name:
            raise ValueError("source_name must not be empty")


def _parse_bool(value: str | None, default: bool = True) -> bool:
    """Parse a boolean environment value; unset or empty yields ``default``."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def load_config() -> Config:
    """
    Build a :class:`Config` from environment variables.

    Returns
    -------
    Config
        Fresh configuration; unset variables take their defaults.
    """
    env = os.environ
    cfg = Config(
        engine=env.get("QSHARNESS_ENGINE", "").strip() or "qsharp",
        debug=_parse_bool(env.get("QSHARNESS_DEBUG")),
        source_name=env.get("QSHARNESS_SOURCE_NAME", "").strip()
        or DEFAULT_SOURCE_NAME,
        package_prefix=env.get("QSHARNESS_PACKAGE_PREFIX", ""),
        target_profile=(
            env.get("QSHARNESS_TARGET_PROFILE", "").strip().lower() or "unrestricted"
        ),
        echo_value=_parse_bool(env.get("QSHARNESS_ECHO_VALUE")),
    )
    logger.debug("Loaded config: %s", cfg)
    return cfg


_config: Config | None = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Return the cached configuration, loading it on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def set_config(config: Config) -> None:
    """Replace the cached configuration."""
    global _config
    with _config_lock:
        _config = config


def reset_config() -> None:
    """Drop the cached configuration; the next :func:`get_config` reloads it."""
    global _config
    with _config_lock:
        _config = None
