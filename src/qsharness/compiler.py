# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Compile-only checking.

:func:`compile_source` compiles a program without evaluating it and
reports each error, resolved to the source unit it came from when the
engine's diagnostic names one. It never produces an execution result.
"""

from __future__ import annotations

import logging

from qsharness.config import Config, get_config
from qsharness.diagnostics import ConsoleSink, Diagnostic, DiagnosticSink
from qsharness.engine.base import EngineProtocol
from qsharness.engine.registry import get_engine
from qsharness.sources import SourceMap


logger = logging.getLogger(__name__)


def compile_source(
    source: str,
    *,
    engine: EngineProtocol | None = None,
    config: Config | None = None,
    sink: DiagnosticSink | None = None,
) -> list[Diagnostic]:
    """
    Compile ``source`` against the core package with no dependencies.

    Parameters
    ----------
    source : str
        Program source text.
    engine : EngineProtocol, optional
        Interpreter engine. Defaults to the configured engine.
    config : Config, optional
        Configuration (virtual file name and package prefix).
    sink : DiagnosticSink, optional
        Receives one line per error. Defaults to ``ConsoleSink``.

    Returns
    -------
    list of Diagnostic
        Compilation errors; empty when the program compiles.
    """
    cfg = config if config is not None else get_config()
    engine = engine if engine is not None else get_engine(cfg.engine)
    sink = sink if sink is not None else ConsoleSink()

    sources = SourceMap.single(
        cfg.source_name, source, package_prefix=cfg.package_prefix
    )
    unit = engine.compile(sources, dependencies=())

    for error in unit.errors:
        resolved = unit.find_source(error)
        sink.error(repr(resolved) if resolved is not None else repr(error))

    logger.debug("Compiled %s: %d error(s)", cfg.source_name, len(unit.errors))
    return list(unit.errors)
