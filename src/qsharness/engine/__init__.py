# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""Interpreter engine boundary: protocols, discovery and the qsharp engine."""

from __future__ import annotations

from qsharness.engine.base import (
    CompileUnit,
    ContextConstructionError,
    ContextProtocol,
    EngineFailure,
    EngineProtocol,
    EvaluationError,
)
from qsharness.engine.registry import (
    clear_engine_cache,
    engine_load_errors,
    get_engine,
    list_available_engines,
    load_engines,
)


__all__ = [
    # Protocols
    "EngineProtocol",
    "ContextProtocol",
    "CompileUnit",
    # Engine failures
    "EngineFailure",
    "ContextConstructionError",
    "EvaluationError",
    # Discovery
    "clear_engine_cache",
    "engine_load_errors",
    "get_engine",
    "list_available_engines",
    "load_engines",
]
