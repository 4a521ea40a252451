# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Q# engine backed by the ``qsharp`` package.

Context construction resets the ``qsharp`` interpreter, evaluates every
source unit (compiling and binding its declarations) and locates the
``@EntryPoint()`` callable. Evaluation calls that entry point with event
capture enabled and replays the captured events, in order, into the
harness's receiver: messages as messages, ``DumpMachine`` output as
states.

Example
-------
>>> from qsharness import run
>>> from qsharness.engine.qsharp_engine import QSharpEngine
>>> result = run(source, engine=QSharpEngine())

Notes
-----
``qsharp`` keeps a single interpreter per process. Access is serialized
with a module lock, and a context whose program was replaced by a later
``create_context`` call reloads its sources before evaluating.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Sequence

from qsharness.diagnostics import Diagnostic, SourceSpan
from qsharness.engine.base import (
    CompileUnit,
    ContextConstructionError,
    EvaluationError,
)
from qsharness.errors import EngineUnavailableError
from qsharness.observer import OutputReceiver
from qsharness.sources import SourceMap


logger = logging.getLogger(__name__)

_TARGET_PROFILE_NAMES = {
    "unrestricted": "Unrestricted",
    "base": "Base",
    "adaptive_ri": "Adaptive_RI",
}

_ENTRY_POINT_RE = re.compile(
    r"@EntryPoint\s*\(\s*\)\s*"
    r"(?:@\w+\s*(?:\([^)]*\))?\s*)*"
    r"(?:internal\s+)?(?:operation|function)\s+(?P<name>\w+)"
    r"\s*(?:<[^>]*>)?\s*\((?P<params>[^)]*)\)"
)
_NAMESPACE_RE = re.compile(r"\bnamespace\s+(?P<name>[\w.]+)\s*\{")
# Line comments and string literals, including interpolated strings.
_COMMENT_OR_STRING_RE = re.compile(r'//[^\n]*|\$?"(?:\\.|[^"\\])*"')
_SPAN_RE = re.compile(r"\[(?P<source>[^\[\]:\s]+):(?P<line>\d+):(?P<column>\d+)\]")
_CODE_RE = re.compile(r"\b(?P<code>(?:Qdk\.)?Qsc(?:\.\w+)+)\b")
_CALL_STACK_RE = re.compile(r"^\s*Call stack:", re.MULTILINE)
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_interpreter_lock = threading.RLock()
# Bumped on every interpreter reset (protected by _interpreter_lock).
_generation = 0


def _require_qsharp() -> Any:
    """Import qsharp or raise a clear error."""
    try:
        import qsharp

        return qsharp
    except ImportError:
        raise EngineUnavailableError(
            "qsharp is required for the qsharp engine. "
            "Install it with: pip install qsharp"
        ) from None


def parse_diagnostic(
    text: str,
    source_name: str | None = None,
    *,
    debug: bool = True,
) -> Diagnostic:
    """
    Build a :class:`Diagnostic` from a ``qsharp`` error report.

    Parameters
    ----------
    text : str
        Rendered error text (``str(QSharpError)``).
    source_name : str, optional
        Virtual file the error belongs to. The engine labels evaluated
        fragments with its own names, so a span is attributed to this
        source when given.
    debug : bool, default=True
        Keep the call stack of runtime errors as the stack trace.

    Returns
    -------
    Diagnostic
        Message, first span, first ``Qsc.*`` code and call stack found in
        the text.
    """
    text = _ANSI_RE.sub("", text).strip()

    stack_trace = None
    stack_match = _CALL_STACK_RE.search(text)
    if stack_match:
        stack_trace = text[stack_match.start() :].strip()
        text = text[: stack_match.start()].rstrip()

    span = None
    span_match = _SPAN_RE.search(text)
    if span_match:
        span = SourceSpan(
            source_name=source_name or span_match.group("source"),
            line=int(span_match.group("line")),
            column=int(span_match.group("column")),
        )

    code_match = _CODE_RE.search(text)

    return Diagnostic(
        message=text or "unknown error",
        span=span,
        stack_trace=stack_trace if debug else None,
        code=code_match.group("code") if code_match else None,
    )


def _strip_comments_and_strings(text: str) -> str:
    """Blank out comments and string literals, keeping offsets and line breaks."""
    return _COMMENT_OR_STRING_RE.sub(
        lambda m: re.sub(r"[^\n]", " ", m.group()), text
    )


def find_entry_expression(sources: SourceMap) -> str:
    """
    Locate the ``@EntryPoint()`` callable and build its call expression.

    Parameters
    ----------
    sources : SourceMap
        Program sources.

    Returns
    -------
    str
        Namespace-qualified call, e.g. ``"MyQuantumApp.Main()"``.

    Raises
    ------
    ContextConstructionError
        If there is no entry point, more than one, or the entry point
        declares parameters.
    """
    found: list[tuple[str, str, str]] = []
    for source in sources:
        code = _strip_comments_and_strings(source.contents)
        for match in _ENTRY_POINT_RE.finditer(code):
            namespace = None
            for ns in _NAMESPACE_RE.finditer(code, 0, match.start()):
                namespace = ns.group("name")
            name = match.group("name")
            qualified = f"{namespace}.{name}" if namespace else name
            found.append((source.name, qualified, match.group("params").strip()))

    if not found:
        raise ContextConstructionError(
            [
                Diagnostic(
                    message="entry point not found",
                    code="Qsc.EntryPoint.NotFound",
                )
            ]
        )
    if len(found) > 1:
        names = ", ".join(qualified for _, qualified, _ in found)
        raise ContextConstructionError(
            [
                Diagnostic(
                    message=f"duplicate entry points: {names}",
                    code="Qsc.EntryPoint.Duplicate",
                )
            ]
        )

    source_name, qualified, params = found[0]
    if params:
        raise ContextConstructionError(
            [
                Diagnostic(
                    message=f"entry point {qualified} must not take parameters",
                    code="Qsc.EntryPoint.Args",
                )
            ]
        )
    logger.debug("Entry point %s found in %s", qualified, source_name)
    return f"{qualified}()"


def _dump_items(dump: Any) -> list[tuple[int, complex]]:
    """Extract ``(basis_index, amplitude)`` pairs from a ``StateDump``."""
    get_dict = getattr(dump, "get_dict", None)
    data = get_dict() if callable(get_dict) else {index: dump[index] for index in dump}
    return [(int(index), complex(amplitude)) for index, amplitude in data.items()]


class QSharpContext:
    """Evaluation context for a program loaded into the ``qsharp`` interpreter."""

    def __init__(
        self,
        engine: QSharpEngine,
        sources: SourceMap,
        entry_expr: str,
        *,
        debug: bool,
        generation: int,
    ) -> None:
        self._engine = engine
        self._sources = sources
        self.entry_expr = entry_expr
        self.debug = debug
        self._generation = generation

    def eval(self, receiver: OutputReceiver) -> Any:
        qsharp = _require_qsharp()
        source_name = self._sources.sources[0].name if self._sources.sources else None

        with _interpreter_lock:
            if self._generation != _generation:
                logger.debug("Interpreter was reset; reloading program sources")
                self._generation = self._engine._load(qsharp, self._sources, self.debug)
            try:
                output = qsharp.eval(self.entry_expr, save_events=True)
            except qsharp.QSharpError as exc:
                raise EvaluationError(
                    [parse_diagnostic(str(exc), source_name, debug=self.debug)]
                ) from exc

        for event in output.get("events", []):
            if isinstance(event, str):
                receiver.message(event)
            elif hasattr(event, "qubit_count"):
                receiver.state(_dump_items(event), int(event.qubit_count))
            else:
                logger.debug("Ignoring engine event of type %s", type(event).__name__)

        return output.get("result")


class QSharpEngine:
    """
    Interpreter engine using the ``qsharp`` package.

    Parameters
    ----------
    target_profile : str, optional
        One of ``unrestricted``, ``base``, ``adaptive_ri``. Defaults to the
        configured profile at the time the interpreter is initialized.
    """

    name = "qsharp"

    def __init__(self, target_profile: str | None = None) -> None:
        if target_profile is not None and target_profile not in _TARGET_PROFILE_NAMES:
            raise ValueError(
                f"target_profile must be one of {tuple(_TARGET_PROFILE_NAMES)}, "
                f"got: {target_profile}"
            )
        self.target_profile = target_profile

    def _resolve_target_profile(self, qsharp: Any) -> Any:
        profile = self.target_profile
        if profile is None:
            from qsharness.config import get_config

            profile = get_config().target_profile
        return getattr(qsharp.TargetProfile, _TARGET_PROFILE_NAMES[profile])

    def _load(self, qsharp: Any, sources: SourceMap, debug: bool) -> int:
        """Reset the interpreter and evaluate every source. Caller holds the lock."""
        global _generation

        qsharp.init(target_profile=self._resolve_target_profile(qsharp))
        _generation += 1

        diagnostics: list[Diagnostic] = []
        for source in sources:
            try:
                qsharp.eval(source.contents)
            except qsharp.QSharpError as exc:
                diagnostics.append(parse_diagnostic(str(exc), source.name, debug=debug))

        if diagnostics:
            raise ContextConstructionError(diagnostics)
        return _generation

    def create_context(self, sources: SourceMap, *, debug: bool) -> QSharpContext:
        qsharp = _require_qsharp()
        with _interpreter_lock:
            generation = self._load(qsharp, sources, debug)
            entry_expr = find_entry_expression(sources)
        logger.debug("Context ready: %s (debug=%s)", entry_expr, debug)
        return QSharpContext(
            self, sources, entry_expr, debug=debug, generation=generation
        )

    def compile(
        self,
        sources: SourceMap,
        dependencies: Sequence[str] = (),
    ) -> CompileUnit:
        if dependencies:
            logger.warning(
                "qsharp engine compiles against core and std only; ignoring %s",
                ", ".join(dependencies),
            )
        qsharp = _require_qsharp()
        try:
            with _interpreter_lock:
                self._load(qsharp, sources, debug=True)
        except ContextConstructionError as exc:
            return CompileUnit(sources=sources, errors=tuple(exc.diagnostics))
        return CompileUnit(sources=sources)
