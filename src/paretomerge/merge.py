"""
Merge driver: drain ordered sources of candidate groups into one archive.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from paretomerge.archive import Archive
from paretomerge.foundation.candidate import Candidate
from paretomerge.foundation.dominance import DominanceRule
from paretomerge.foundation.problem import ProblemShape
from paretomerge.io import ResultEntry, ResultFileReader, ResultFileWriter, write_objectives

Group = Iterable[Candidate] | ResultEntry
Source = Iterable[Group]


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass
class MergeReport:
    """Outcome of one merge session."""

    sources: int = 0
    entries: int = 0
    candidates: int = 0
    changes: list[bool] = field(default_factory=list)
    members: tuple[Candidate, ...] = ()

    @property
    def changed(self) -> bool:
        return any(self.changes)


def _population(group: Group) -> Iterable[Candidate]:
    if isinstance(group, ResultEntry):
        return group.population
    return group


def merge(archive: Archive, sources: Iterable[Source], *, shape: ProblemShape | None = None) -> MergeReport:
    """
    Feed every candidate of every group of every source into ``archive``.

    Sources are drained strictly in order and groups in emission order. Each
    group goes through ``archive.insert_all`` and its change flag is recorded.
    Errors from a source or from the archive propagate; candidates inserted
    before the failure stay in the archive. Sources that expose ``close()``
    (generators included) are closed on every exit path.
    """
    report = MergeReport()

    def _counted(group: Group) -> Iterator[Candidate]:
        for candidate in _population(group):
            if shape is not None:
                shape.validate(candidate)
            report.candidates += 1
            yield candidate

    for source_index, source in enumerate(sources, start=1):
        groups = iter(source)
        entries_before = report.entries
        try:
            for group in groups:
                report.entries += 1
                changed = archive.insert_all(_counted(group))
                report.changes.append(changed)
                _logger().debug(
                    "Added entry %d of source %d (changed=%s, size=%d)",
                    report.entries - entries_before,
                    source_index,
                    changed,
                    len(archive),
                )
        finally:
            close = getattr(groups, "close", None)
            if close is not None:
                close()
        report.sources += 1
        _logger().info(
            "Merged source %d: %d entries, archive size %d",
            source_index,
            report.entries - entries_before,
            len(archive),
        )

    report.members = archive.members
    return report


def read_groups(path: str | Path, shape: ProblemShape) -> Iterator[ResultEntry]:
    """Yield the entries of one result file; the file is closed when the generator finishes or is closed."""
    with ResultFileReader(path, shape) as reader:
        while reader.has_next():
            yield reader.next()


def open_sources(paths: Sequence[str | Path], shape: ProblemShape) -> list[Iterator[ResultEntry]]:
    """One lazy source per path. Files are opened only when their source is drained."""
    return [read_groups(path, shape) for path in paths]


def merge_files(
    paths: Sequence[str | Path],
    shape: ProblemShape,
    rule: DominanceRule,
    output: str | Path,
    *,
    result_file: bool = False,
) -> MergeReport:
    """
    Merge the result files at ``paths`` and write the merged set to ``output``.

    ``result_file=True`` writes a single result-file entry; otherwise the
    output is a bare objective listing. The target is always overwritten.
    """
    archive = Archive(rule, n_obj=shape.n_obj)
    _logger().info("Merging %d file(s) with %s dominance", len(paths), rule.kind.replace("_", "-"))
    report = merge(archive, open_sources(paths, shape), shape=shape)

    _logger().info("Writing %d merged solutions to %s", len(report.members), output)
    if result_file:
        with ResultFileWriter(output, shape) as writer:
            writer.append(ResultEntry(report.members))
    else:
        write_objectives(output, report.members, n_obj=shape.n_obj)
    return report


__all__ = ["MergeReport", "merge", "merge_files", "open_sources", "read_groups"]
