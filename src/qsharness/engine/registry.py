# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Engine lookup by name.

The ``qsharp`` engine ships with qsharness. Additional engines can be
contributed by other distributions through the ``qsharness.engines``
entry point group::

    [project.entry-points."qsharness.engines"]
    my_engine = "my_package.engine:MyEngine"

An engine is only imported and instantiated when it is first requested,
so a broken or heavy plugin costs nothing until someone asks for it by
name. Built-in engines take precedence over entry points of the same
name.
"""

from __future__ import annotations

import logging
import threading
from importlib.metadata import entry_points
from typing import Callable

from qsharness.engine.base import EngineProtocol
from qsharness.errors import EngineNotFoundError, EngineUnavailableError


logger = logging.getLogger(__name__)

ENGINE_ENTRY_POINT_GROUP = "qsharness.engines"

DEFAULT_ENGINE = "qsharp"

EngineFactory = Callable[[], EngineProtocol]

# Instantiated engines and last load failure per name (protected by _lock).
_instances: dict[str, EngineProtocol] = {}
_failures: dict[str, str] = {}
_lock = threading.Lock()


def _builtin_engines() -> dict[str, EngineFactory]:
    from qsharness.engine.qsharp_engine import QSharpEngine

    return {QSharpEngine.name: QSharpEngine}


def _plugin_engines() -> dict[str, EngineFactory]:
    """Factories for engines registered by installed distributions."""
    factories: dict[str, EngineFactory] = {}
    for ep in entry_points(group=ENGINE_ENTRY_POINT_GROUP):
        if ep.name in factories:
            logger.warning("Ignoring second engine entry point named %r", ep.name)
            continue
        factories[ep.name] = lambda ep=ep: ep.load()()
    return factories


def _factories() -> dict[str, EngineFactory]:
    factories = _plugin_engines()
    factories.update(_builtin_engines())
    return factories


def _instantiate(name: str, factory: EngineFactory) -> EngineProtocol:
    engine = factory()
    if not isinstance(engine, EngineProtocol):
        raise TypeError(f"{type(engine).__name__} does not implement EngineProtocol")
    if engine.name != name:
        raise ValueError(f"registered as {name!r} but reports name {engine.name!r}")
    return engine


def list_available_engines() -> list[str]:
    """Names of all known engines, loaded or not, sorted alphabetically."""
    return sorted(_factories())


def engine_load_errors() -> dict[str, str]:
    """Engines that failed to load, mapped to ``"ExcType: message"``."""
    with _lock:
        return dict(_failures)


def clear_engine_cache() -> None:
    """Forget instantiated engines and recorded load failures."""
    with _lock:
        _instances.clear()
        _failures.clear()


def get_engine(name: str = DEFAULT_ENGINE) -> EngineProtocol:
    """
    Return the engine called ``name``, instantiating it on first use.

    Parameters
    ----------
    name : str, default="qsharp"
        Engine name.

    Returns
    -------
    EngineProtocol
        The same instance on every call until :func:`clear_engine_cache`.

    Raises
    ------
    EngineNotFoundError
        If no built-in or entry point engine has this name.
    EngineUnavailableError
        If the engine is known but could not be imported or instantiated.
    """
    with _lock:
        engine = _instances.get(name)
        if engine is not None:
            return engine

        factories = _factories()
        factory = factories.get(name)
        if factory is None:
            available = ", ".join(sorted(factories)) or "(none installed)"
            raise EngineNotFoundError(name, f"Available engines: {available}.")

        try:
            engine = _instantiate(name, factory)
        except Exception as exc:
            _failures[name] = f"{type(exc).__name__}: {exc}"
            logger.warning("Engine %s failed to load: %s", name, exc, exc_info=True)
            raise EngineUnavailableError(
                f"Engine {name!r} failed to load: {_failures[name]}"
            ) from exc

        _instances[name] = engine
        _failures.pop(name, None)
        logger.debug("Engine %s ready (%s)", name, type(engine).__name__)
        return engine


def load_engines() -> dict[str, EngineProtocol]:
    """
    Instantiate every known engine.

    Returns
    -------
    dict
        Engines that loaded, by name. Failures are skipped and can be
        inspected with :func:`engine_load_errors`.
    """
    loaded: dict[str, EngineProtocol] = {}
    for name in list_available_engines():
        try:
            loaded[name] = get_engine(name)
        except EngineUnavailableError:
            # Recorded in _failures.
            continue
    return loaded
