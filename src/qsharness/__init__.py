"""
qsharness: run Q# programs and capture what they observably do.

Quick Start
-----------
>>> from qsharness import run
>>> result = run('''
... namespace MyQuantumApp {
...     @EntryPoint()
...     operation Main() : Unit {
...         use q = Qubit();
...         H(q);
...         Microsoft.Quantum.Diagnostics.DumpMachine();
...         Message("done");
...         Reset(q);
...     }
... }''')
>>> result.messages
('done',)
>>> [s.id for s in result.states]
['|0⟩', '|1⟩']

Error Handling
--------------
>>> from qsharness import ContextError, ExecutionError
>>> try:
...     run("namespace Broken {")
... except ContextError as exc:
...     print(exc.diagnostics[0].message)

Capturing Diagnostics
---------------------
>>> from qsharness import CollectingSink
>>> sink = CollectingSink()
>>> run(source, sink=sink)
>>> sink.errors, sink.outputs

Submodules
----------
- qsharness.runner: Execution step and run orchestrator
- qsharness.compiler: Compile-only checking
- qsharness.observer: Output observer interface and recorder
- qsharness.result: Result value types
- qsharness.engine: Engine protocols, discovery and the qsharp engine
- qsharness.config: Configuration management
- qsharness.errors: Public exception types
- qsharness.dataframe: DataFrame export (requires qsharness[dataframe])
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any


__all__ = [
    # Version
    "__version__",
    # Running
    "run",
    "execute",
    "compile_source",
    # Results
    "ExecutionResult",
    "BasisState",
    # Diagnostics
    "Diagnostic",
    "SourceSpan",
    "CollectingSink",
    "ConsoleSink",
    # Errors
    "QsHarnessError",
    "RunError",
    "ContextError",
    "ExecutionError",
    # Config
    "Config",
    "get_config",
    "set_config",
]


try:
    __version__ = version("qsharness")
except PackageNotFoundError:
    __version__ = "0.0.0"


if TYPE_CHECKING:
    from qsharness.compiler import compile_source
    from qsharness.config import Config, get_config, set_config
    from qsharness.diagnostics import (
        CollectingSink,
        ConsoleSink,
        Diagnostic,
        SourceSpan,
    )
    from qsharness.errors import (
        ContextError,
        ExecutionError,
        QsHarnessError,
        RunError,
    )
    from qsharness.result import BasisState, ExecutionResult
    from qsharness.runner import execute, run


_LAZY_IMPORTS = {
    # Running
    "run": ("qsharness.runner", "run"),
    "execute": ("qsharness.runner", "execute"),
    "compile_source": ("qsharness.compiler", "compile_source"),
    # Results
    "ExecutionResult": ("qsharness.result", "ExecutionResult"),
    "BasisState": ("qsharness.result", "BasisState"),
    # Diagnostics
    "Diagnostic": ("qsharness.diagnostics", "Diagnostic"),
    "SourceSpan": ("qsharness.diagnostics", "SourceSpan"),
    "CollectingSink": ("qsharness.diagnostics", "CollectingSink"),
    "ConsoleSink": ("qsharness.diagnostics", "ConsoleSink"),
    # Errors
    "QsHarnessError": ("qsharness.errors", "QsHarnessError"),
    "RunError": ("qsharness.errors", "RunError"),
    "ContextError": ("qsharness.errors", "ContextError"),
    "ExecutionError": ("qsharness.errors", "ExecutionError"),
    # Config
    "Config": ("qsharness.config", "Config"),
    "get_config": ("qsharness.config", "get_config"),
    "set_config": ("qsharness.config", "set_config"),
}


def __getattr__(name: str) -> Any:
    """Lazy import handler for module-level attributes."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = __import__(module_path, fromlist=[attr_name])
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available attributes for autocomplete."""
    return sorted(set(__all__) | set(_LAZY_IMPORTS.keys()))
