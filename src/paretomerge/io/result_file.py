"""
Plain-text result files: a sequence of entries, each a population snapshot.

Layout::

    # Problem = DTLZ2
    # Variables = 12
    # Objectives = 3
    //NFE=10000
    0.5 0.1 ... 0.31 0.62 0.71
    ...
    #

Each data line holds ``n_var`` variable tokens followed by ``n_obj`` objective
tokens. ``//key=value`` lines are properties of the entry being read and a
line holding a single ``#`` closes the entry.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from paretomerge.foundation.candidate import Candidate, Value
from paretomerge.foundation.exceptions import DimensionMismatchError, SinkWriteError, SourceReadError
from paretomerge.foundation.problem import ProblemShape

ENTRY_SEPARATOR = "#"
PROPERTY_PREFIX = "//"


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultEntry:
    """One stored population plus its ``//`` properties."""

    population: tuple[Candidate, ...]
    properties: Mapping[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.population)


def _parse_variable(token: str) -> Value:
    try:
        return int(token)
    except ValueError:
        return float(token)


def format_value(value: Value) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(float(value))


class ResultFileReader:
    """
    Lazy reader over the entries of one result file.

    Use as a context manager so the handle is closed on every exit path::

        with ResultFileReader(path, shape) as reader:
            while reader.has_next():
                entry = reader.next()
    """

    def __init__(self, path: str | Path, shape: ProblemShape) -> None:
        self.path = Path(path)
        self.shape = shape
        self.header: dict[str, str] = {}
        self._line_no = 0
        self._entries_read = 0
        self._pending: ResultEntry | None = None
        self._exhausted = False
        try:
            self._handle: IO[str] | None = self.path.open("r", encoding="utf-8")
        except OSError as exc:
            raise SourceReadError(f"Cannot open result file '{self.path}': {exc}", path=str(self.path)) from exc
        _logger().debug("Opened result file %s", self.path)

    # ------------------------------------------------------------- iteration
    def has_next(self) -> bool:
        if self._pending is None and not self._exhausted:
            self._pending = self._read_entry()
        return self._pending is not None

    def next(self) -> ResultEntry:
        if not self.has_next():
            raise StopIteration
        entry, self._pending = self._pending, None
        assert entry is not None
        self._entries_read += 1
        return entry

    __next__ = next

    def __iter__(self) -> Iterator[ResultEntry]:
        return self

    @property
    def entries_read(self) -> int:
        return self._entries_read

    # -------------------------------------------------------------- lifecycle
    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            _logger().debug("Closed result file %s", self.path)

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __enter__(self) -> "ResultFileReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---------------------------------------------------------------- parsing
    def _read_entry(self) -> ResultEntry | None:
        if self._handle is None:
            raise SourceReadError(f"Result file '{self.path}' is closed.", path=str(self.path))
        population: list[Candidate] = []
        properties: dict[str, str] = {}
        started = False
        try:
            for raw in self._handle:
                self._line_no += 1
                line = raw.strip()
                if not line:
                    continue
                if line == ENTRY_SEPARATOR:
                    return ResultEntry(tuple(population), properties)
                if line.startswith(PROPERTY_PREFIX):
                    key, _, value = line[len(PROPERTY_PREFIX) :].partition("=")
                    properties[key.strip()] = value.strip()
                    started = True
                    continue
                if line.startswith(ENTRY_SEPARATOR):
                    self._read_header_line(line)
                    continue
                population.append(self._parse_line(line))
                started = True
        except UnicodeDecodeError as exc:
            raise SourceReadError(
                f"{self.path}:{self._line_no + 1}: undecodable data ({exc}).",
                path=str(self.path),
                line=self._line_no + 1,
            ) from exc

        self._exhausted = True
        if started:
            raise SourceReadError(
                f"{self.path}: entry {self._entries_read + 1} is not terminated by '{ENTRY_SEPARATOR}' (truncated file?).",
                path=str(self.path),
                line=self._line_no,
            )
        return None

    def _read_header_line(self, line: str) -> None:
        key, sep, value = line[len(ENTRY_SEPARATOR) :].partition("=")
        if sep:
            self.header[key.strip()] = value.strip()

    def _parse_line(self, line: str) -> Candidate:
        tokens = line.split()
        if len(tokens) != self.shape.record_length:
            raise DimensionMismatchError(
                f"{self.path}:{self._line_no}: expected {self.shape.n_var} variables and "
                f"{self.shape.n_obj} objectives ({self.shape.record_length} values), found {len(tokens)}.",
                expected=self.shape.record_length,
                actual=len(tokens),
                path=str(self.path),
            )
        n_var = self.shape.n_var
        try:
            variables = tuple(_parse_variable(token) for token in tokens[:n_var])
            objectives = tuple(float(token) for token in tokens[n_var:])
        except ValueError as exc:
            raise SourceReadError(
                f"{self.path}:{self._line_no}: invalid numeric value ({exc}).",
                path=str(self.path),
                line=self._line_no,
            ) from exc
        if not all(math.isfinite(value) for value in objectives):
            raise SourceReadError(
                f"{self.path}:{self._line_no}: objective values must be finite, got {tokens[n_var:]}.",
                path=str(self.path),
                line=self._line_no,
            )
        return Candidate(variables, objectives)


class ResultFileWriter:
    """
    Writes result-file entries. An existing target is replaced, never appended to.
    """

    def __init__(self, path: str | Path, shape: ProblemShape, *, problem_name: str | None = None) -> None:
        self.path = Path(path)
        self.shape = shape
        self.entries_written = 0
        try:
            if self.path.exists():
                self.path.unlink()
            self._handle: IO[str] | None = self.path.open("w", encoding="utf-8")
            self._write_header(problem_name or shape.name)
        except OSError as exc:
            raise SinkWriteError(f"Cannot write result file '{self.path}': {exc}", path=str(self.path)) from exc

    def _write_header(self, problem_name: str | None) -> None:
        assert self._handle is not None
        if problem_name:
            self._handle.write(f"# Problem = {problem_name}\n")
        self._handle.write(f"# Variables = {self.shape.n_var}\n")
        self._handle.write(f"# Objectives = {self.shape.n_obj}\n")

    def append(self, entry: ResultEntry | Sequence[Candidate]) -> None:
        if not isinstance(entry, ResultEntry):
            entry = ResultEntry(tuple(entry))
        if self._handle is None:
            raise SinkWriteError(f"Result file '{self.path}' is closed.", path=str(self.path))
        try:
            for key, value in entry.properties.items():
                self._handle.write(f"{PROPERTY_PREFIX}{key}={value}\n")
            for candidate in entry.population:
                self.shape.validate(candidate, path=str(self.path))
                values = [*candidate.variables, *candidate.objectives]
                self._handle.write(" ".join(format_value(v) for v in values) + "\n")
            self._handle.write(ENTRY_SEPARATOR + "\n")
        except OSError as exc:
            raise SinkWriteError(f"Cannot write result file '{self.path}': {exc}", path=str(self.path)) from exc
        self.entries_written += 1

    def close(self) -> None:
        if self._handle is not None:
            try:
                self._handle.close()
            except OSError as exc:
                raise SinkWriteError(f"Cannot write result file '{self.path}': {exc}", path=str(self.path)) from exc
            finally:
                self._handle = None

    def __enter__(self) -> "ResultFileWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["ResultEntry", "ResultFileReader", "ResultFileWriter", "format_value"]
