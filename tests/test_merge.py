from __future__ import annotations

import logging

import numpy as np
import pytest

from paretomerge.archive import Archive
from paretomerge.foundation.candidate import Candidate
from paretomerge.foundation.dominance import PARETO, DominanceRule
from paretomerge.foundation.exceptions import ConfigurationError, DimensionMismatchError, SourceReadError
from paretomerge.foundation.problem import ProblemShape
from paretomerge.io import ResultFileReader, read_objectives
from paretomerge.merge import MergeReport, merge, merge_files, open_sources

SHAPE = ProblemShape(n_var=1, n_obj=2)


def _c(*objectives: float) -> Candidate:
    return Candidate((0.0,), objectives)


def test_merge_reports_change_per_group() -> None:
    archive = Archive()
    sources = [
        [[_c(1, 5), _c(2, 4)], [_c(3, 3)]],
        [[_c(2, 6)], [_c(1, 4)]],
    ]
    report = merge(archive, sources)
    assert isinstance(report, MergeReport)
    assert report.sources == 2
    assert report.entries == 4
    assert report.candidates == 5
    assert report.changes == [True, True, False, True]
    assert report.changed
    assert {m.objectives for m in report.members} == {(1.0, 4.0), (3.0, 3.0)}


def test_merging_empty_sources_changes_nothing() -> None:
    archive = Archive()
    report = merge(archive, [[], iter(()), [[]]])
    assert report.members == ()
    assert report.changes == [False]
    assert not report.changed
    assert len(archive) == 0


def test_three_empty_files(write_result_file, tmp_path) -> None:
    paths = [write_result_file([]) for _ in range(3)]
    report = merge(Archive(), open_sources(paths, SHAPE), shape=SHAPE)
    assert report.sources == 3
    assert report.entries == 0
    assert report.members == ()
    assert not report.changed


def test_mismatched_entry_aborts_and_keeps_earlier_candidates() -> None:
    archive = Archive()
    sources = [[[_c(1, 5), _c(2, 4)], [Candidate((0.0,), (0.0, 0.0, 0.0))]]]
    with pytest.raises(DimensionMismatchError):
        merge(archive, sources)
    assert {m.objectives for m in archive.members} == {(1.0, 5.0), (2.0, 4.0)}


def test_mismatched_record_in_file_aborts_and_closes_reader(write_result_file, monkeypatch) -> None:
    path = write_result_file([[[0.0, 1.0, 5.0], [0.0, 2.0, 4.0]], [[0.0, 0.5, 0.5, 0.5]]])
    opened: list[ResultFileReader] = []
    original_enter = ResultFileReader.__enter__

    def _track(self):
        opened.append(self)
        return original_enter(self)

    monkeypatch.setattr(ResultFileReader, "__enter__", _track)
    archive = Archive(n_obj=2)
    with pytest.raises(DimensionMismatchError):
        merge(archive, open_sources([path], SHAPE), shape=SHAPE)
    assert len(archive) == 2
    assert opened and all(reader.closed for reader in opened)


def test_shape_validation_catches_variable_mismatch() -> None:
    archive = Archive()
    with pytest.raises(DimensionMismatchError):
        merge(archive, [[[Candidate((0.0, 1.0), (1.0, 1.0))]]], shape=SHAPE)
    assert len(archive) == 0


def test_source_error_propagates_without_rollback() -> None:
    def _source():
        yield [_c(1, 1)]
        raise SourceReadError("corrupt record")

    archive = Archive()
    with pytest.raises(SourceReadError):
        merge(archive, [_source()])
    assert archive.members == (_c(1, 1),)


def test_archive_error_closes_suspended_source() -> None:
    closed: list[bool] = []

    def _source():
        try:
            yield [_c(1, 1)]
            yield [Candidate((0.0,), (1.0,))]
            yield [_c(0, 0)]
        finally:
            closed.append(True)

    with pytest.raises(DimensionMismatchError):
        merge(Archive(), [_source()])
    assert closed == [True]


def test_sources_are_consumed_in_order() -> None:
    rule = DominanceRule.epsilon_box(1.0)
    # Same box, equal corner distance: the lexicographic fallback decides.
    forward = merge(Archive(rule), [[[_c(0.3, 0.1)]], [[_c(0.1, 0.3)]]])
    assert forward.members == (_c(0.1, 0.3),)
    assert forward.changes == [True, True]

    backward = merge(Archive(rule), [[[_c(0.1, 0.3)]], [[_c(0.3, 0.1)]]])
    assert backward.members == (_c(0.1, 0.3),)
    assert backward.changes == [True, False]


def test_merge_files_writes_listing(write_result_file, tmp_path) -> None:
    a = write_result_file([[[0.0, 1.0, 5.0], [0.0, 2.0, 4.0]]])
    b = write_result_file([[[0.0, 3.0, 3.0]], [[0.0, 1.0, 4.0]]])
    out = tmp_path / "merged.txt"
    report = merge_files([a, b], SHAPE, PARETO, out)
    assert report.sources == 2
    np.testing.assert_allclose(read_objectives(out), [[3.0, 3.0], [1.0, 4.0]])


def test_merge_files_writes_result_file(write_result_file, tmp_path) -> None:
    a = write_result_file([[[0.0, 0.1, 0.1], [1.0, 0.2, 0.2], [2.0, 1.5, 0.2]]])
    out = tmp_path / "merged.set"
    out.write_text("previous\n", encoding="utf-8")
    merge_files([a], SHAPE, DominanceRule.epsilon_box([1.0, 1.0]), out, result_file=True)
    with ResultFileReader(out, SHAPE) as reader:
        entries = list(reader)
    assert len(entries) == 1
    assert [c.objectives for c in entries[0].population] == [(0.1, 0.1)]


def test_merge_files_rejects_bad_epsilon_before_reading(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        merge_files([tmp_path / "never-opened.set"], SHAPE, DominanceRule.epsilon_box([1.0, 1.0, 1.0]), tmp_path / "o")


def test_merge_logs_progress(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="paretomerge"):
        merge(Archive(), [[[_c(1, 1)]]])
    assert "Added entry 1 of source 1 (changed=True" in caplog.text
    assert "Merged source 1" in caplog.text
