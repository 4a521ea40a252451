# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Shared fixtures for qsharness tests.

Provides a scripted fake engine so the harness can be exercised without
the qsharp runtime, plus isolated configuration and CLI fixtures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Sequence

import pytest
from click.testing import CliRunner
from qsharness.cli import cli
from qsharness.config import Config, reset_config
from qsharness.diagnostics import CollectingSink, Diagnostic
from qsharness.engine import registry as engine_registry
from qsharness.engine.base import (
    CompileUnit,
    ContextConstructionError,
    EvaluationError,
)
from qsharness.sources import SourceMap


# ---------------------------------------------------------------------------
# Fake engine
# ---------------------------------------------------------------------------


class _FakeContext:
    """Replays a script of events into the receiver."""

    def __init__(self, engine: FakeEngine) -> None:
        self._engine = engine

    def eval(self, receiver: Any) -> Any:
        self._engine.eval_calls += 1
        for event in self._engine.events:
            kind = event[0]
            if kind == "message":
                receiver.message(event[1])
            elif kind == "state":
                receiver.state(event[1], event[2])
        if self._engine.eval_exception is not None:
            raise self._engine.eval_exception
        if self._engine.eval_errors:
            raise EvaluationError(self._engine.eval_errors)
        return self._engine.value


class FakeEngine:
    """
    Scripted engine.

    ``events`` is a list of ``("message", text)`` and
    ``("state", [(index, amplitude), ...], qubit_count)`` tuples replayed
    on every evaluation. ``eval_exception``, when set, is raised after the
    events instead of returning a value.
    """

    name = "fake"

    def __init__(
        self,
        events: Sequence[tuple[Any, ...]] = (),
        *,
        value: Any = None,
        context_errors: Sequence[Diagnostic] = (),
        eval_errors: Sequence[Diagnostic] = (),
        compile_errors: Sequence[Diagnostic] = (),
        eval_exception: Exception | None = None,
    ) -> None:
        self.events = list(events)
        self.value = value
        self.context_errors = list(context_errors)
        self.eval_errors = list(eval_errors)
        self.compile_errors = tuple(compile_errors)
        self.eval_exception = eval_exception
        self.contexts: list[tuple[SourceMap, bool]] = []
        self.compiles: list[tuple[SourceMap, tuple[str, ...]]] = []
        self.eval_calls = 0

    def create_context(self, sources: SourceMap, *, debug: bool) -> _FakeContext:
        self.contexts.append((sources, debug))
        if self.context_errors:
            raise ContextConstructionError(self.context_errors)
        return _FakeContext(self)

    def compile(
        self,
        sources: SourceMap,
        dependencies: Sequence[str] = (),
    ) -> CompileUnit:
        self.compiles.append((sources, tuple(dependencies)))
        return CompileUnit(sources=sources, errors=self.compile_errors)


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    """Factory for scripted fake engines."""

    def _create(*events: tuple[Any, ...], **kwargs: Any) -> FakeEngine:
        return FakeEngine(events, **kwargs)

    return _create


@pytest.fixture
def hello_engine(make_engine: Callable[..., FakeEngine]) -> FakeEngine:
    """Engine behaving like the Hello program: one message, no qubits."""
    return make_engine(("message", "Hello"))


@pytest.fixture
def bell_engine(make_engine: Callable[..., FakeEngine]) -> FakeEngine:
    """Engine dumping a two-qubit Bell state."""
    amp = 0.7071067811865476
    return make_engine(
        ("state", [(0, complex(amp, 0.0)), (3, complex(amp, 0.0))], 2),
        ("message", "bell prepared"),
    )


# ---------------------------------------------------------------------------
# Sinks and config
# ---------------------------------------------------------------------------


@pytest.fixture
def sink() -> CollectingSink:
    """Sink recording everything the harness emits."""
    return CollectingSink()


@pytest.fixture
def config() -> Config:
    """Default configuration, independent of the environment."""
    return Config()


@pytest.fixture(autouse=True)
def isolate_config():
    """Ensure tests never share a cached config."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove all QSHARNESS_* variables from the environment."""
    import os

    for key in list(os.environ):
        if key.startswith("QSHARNESS_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# Engine registry and CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def registered_engines(monkeypatch: pytest.MonkeyPatch):
    """
    Replace the known engines with an explicit set of instances.

    Usage:
        registered_engines(engine_a, engine_b)
    """

    def _register(*engines: Any) -> None:
        factories = {engine.name: (lambda engine=engine: engine) for engine in engines}
        monkeypatch.setattr(engine_registry, "_plugin_engines", dict)
        monkeypatch.setattr(
            engine_registry, "_builtin_engines", lambda: dict(factories)
        )
        engine_registry.clear_engine_cache()

    yield _register
    engine_registry.clear_engine_cache()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def program_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write program text to a temporary .qs file."""

    def _write(text: str) -> Path:
        path = tmp_path / "program.qs"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def invoke(cli_runner: CliRunner, clean_env: pytest.MonkeyPatch) -> Callable[..., Any]:
    """
    Invoke CLI commands with a clean environment.

    Usage:
        result = invoke("run", "program.qs")
        result = invoke("--engine", "fake", "run", "program.qs", "--format", "json")
    """

    def _invoke(*args: str, input: str | None = None):
        return cli_runner.invoke(cli, list(args), input=input)

    return _invoke
