# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Program execution.

:func:`run` is the public entry point: source text in, an
:class:`~qsharness.result.ExecutionResult` out. It delegates to
:func:`execute`, which owns the lifecycle source → context → evaluation →
result.

Failure Handling
----------------
Engine failures are caught here and re-raised as the harness's own
:class:`~qsharness.errors.RunError` types:

- :class:`~qsharness.errors.ContextError` when the context cannot be built
  (compile or binding errors);
- :class:`~qsharness.errors.ExecutionError` when evaluation fails.

Every diagnostic (and its stack trace, if any) is written to the sink's
error channel before the exception is raised. Nothing is retried and no
partial result is ever returned.

Example
-------
>>> from qsharness import run
>>> result = run('''
... namespace MyQuantumApp {
...     @EntryPoint()
...     operation Main() : Unit {
...         Message("Hello");
...     }
... }''')
()
>>> result.messages
('Hello',)
"""

from __future__ import annotations

import logging
from typing import Any

from qsharness.config import Config, get_config
from qsharness.diagnostics import ConsoleSink, Diagnostic, DiagnosticSink
from qsharness.engine.base import (
    ContextConstructionError,
    EngineFailure,
    EngineProtocol,
    EvaluationError,
)
from qsharness.engine.registry import get_engine
from qsharness.errors import ContextError, ExecutionError, ObserverError
from qsharness.observer import ExecutionRecorder
from qsharness.result import ExecutionResult
from qsharness.sources import SourceMap


logger = logging.getLogger(__name__)


def format_value(value: Any) -> str:
    """Render an entry point's returned value; ``None`` is the unit value ``()``."""
    if value is None:
        return "()"
    return str(value)


def _resolve(
    engine: EngineProtocol | None,
    config: Config | None,
    sink: DiagnosticSink | None,
) -> tuple[EngineProtocol, Config, DiagnosticSink]:
    cfg = config if config is not None else get_config()
    return (
        engine if engine is not None else get_engine(cfg.engine),
        cfg,
        sink if sink is not None else ConsoleSink(),
    )


def _report_runtime_errors(
    sink: DiagnosticSink,
    diagnostics: list[Diagnostic],
) -> None:
    for diagnostic in diagnostics:
        if diagnostic.stack_trace:
            sink.error(diagnostic.stack_trace)
        sink.error(f"error: {diagnostic!r}")


def execute(
    source: str,
    *,
    engine: EngineProtocol | None = None,
    config: Config | None = None,
    sink: DiagnosticSink | None = None,
) -> ExecutionResult:
    """
    Build an interpreter context for ``source`` and evaluate it once.

    Parameters
    ----------
    source : str
        Program source text. Empty or invalid text is accepted and fails
        with :class:`~qsharness.errors.ContextError`.
    engine : EngineProtocol, optional
        Interpreter engine. Defaults to the configured engine.
    config : Config, optional
        Configuration. Defaults to :func:`~qsharness.config.get_config`.
    sink : DiagnosticSink, optional
        Receives diagnostics and the returned value. Defaults to
        :class:`~qsharness.diagnostics.ConsoleSink`.

    Returns
    -------
    ExecutionResult
        Messages and final state captured during evaluation.

    Raises
    ------
    ContextError
        If the engine cannot compile or bind the program.
    ExecutionError
        If evaluation fails at runtime, or its output cannot be recorded.
    """
    engine, cfg, sink = _resolve(engine, config, sink)
    sources = SourceMap.single(
        cfg.source_name, source, package_prefix=cfg.package_prefix
    )

    logger.debug(
        "Creating context with engine %s (debug=%s, source=%s)",
        engine.name,
        cfg.debug,
        cfg.source_name,
    )
    try:
        context = engine.create_context(sources, debug=cfg.debug)
    except ContextConstructionError as exc:
        for diagnostic in exc.diagnostics:
            sink.error(f"error: {diagnostic!r}")
        logger.debug(
            "Context construction failed: %d diagnostic(s)", len(exc.diagnostics)
        )
        raise ContextError(exc.diagnostics) from exc

    recorder = ExecutionRecorder()
    try:
        value = context.eval(recorder)
    except EvaluationError as exc:
        _report_runtime_errors(sink, exc.diagnostics)
        logger.debug("Evaluation failed: %d diagnostic(s)", len(exc.diagnostics))
        raise ExecutionError(exc.diagnostics) from exc
    except ContextConstructionError as exc:
        # A context may rebuild its program before evaluating.
        for diagnostic in exc.diagnostics:
            sink.error(f"error: {diagnostic!r}")
        raise ContextError(exc.diagnostics) from exc
    except EngineFailure as exc:
        _report_runtime_errors(sink, exc.diagnostics)
        raise ExecutionError(exc.diagnostics) from exc
    except ObserverError as exc:
        diagnostics = [Diagnostic(message=str(exc))]
        _report_runtime_errors(sink, diagnostics)
        raise ExecutionError(diagnostics) from exc

    if cfg.echo_value:
        sink.output(format_value(value))

    result = recorder.to_result()
    logger.debug(
        "Evaluation finished: %d message(s), %d basis state(s), %d qubit(s)",
        len(result.messages),
        len(result.states),
        result.qubit_count,
    )
    return result


def run(
    source: str,
    *,
    engine: EngineProtocol | None = None,
    config: Config | None = None,
    sink: DiagnosticSink | None = None,
) -> ExecutionResult:
    """
    Run a program and capture its messages and final state.

    The call either fully succeeds or raises a single
    :class:`~qsharness.errors.RunError`; see :func:`execute` for the
    parameters.
    """
    return execute(source, engine=engine, config=config, sink=sink)
