# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Virtual source maps.

Programs are handed to engines as in-memory source units labeled with a
synthetic file name, so no real filesystem path is ever involved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator


if TYPE_CHECKING:
    from qsharness.diagnostics import Diagnostic


DEFAULT_SOURCE_NAME = "temp.qs"


@dataclass(frozen=True)
class Source:
    """A named unit of source text."""

    name: str
    contents: str


@dataclass(frozen=True)
class SourceMap:
    """
    Ordered collection of source units submitted together.

    Parameters
    ----------
    sources : tuple of Source
        Source units, in submission order.
    package_prefix : str, optional
        Path prefix the engine strips from source names. Empty for
        virtual maps.
    """

    sources: tuple[Source, ...] = ()
    package_prefix: str | None = ""

    @classmethod
    def single(
        cls,
        name: str,
        contents: str,
        package_prefix: str | None = "",
    ) -> SourceMap:
        """Build a map holding one virtual file."""
        return cls(sources=(Source(name, contents),), package_prefix=package_prefix)

    def __iter__(self) -> Iterator[Source]:
        return iter(self.sources)

    def __len__(self) -> int:
        return len(self.sources)

    def find_by_name(self, name: str) -> Source | None:
        """Return the source unit called ``name``, if any."""
        for source in self.sources:
            if source.name == name:
                return source
        return None

    def find_by_diagnostic(self, diagnostic: Diagnostic) -> Source | None:
        """
        Resolve a diagnostic to the source unit it points into.

        Parameters
        ----------
        diagnostic : Diagnostic
            Diagnostic reported by an engine.

        Returns
        -------
        Source or None
            The source unit named by the diagnostic's span, or None when
            the diagnostic carries no span or names an unknown unit.
        """
        if diagnostic.span is None:
            return None
        return self.find_by_name(diagnostic.span.source_name)
