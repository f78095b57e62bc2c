"""Tests for timed statement execution and artifact capture."""

from __future__ import annotations

import types

import pandas as pd
import pytest

from sqlbench.errors import ArtifactWriteError, EngineExecutionError
from sqlbench.models.statement_batch import StatementBatch
from sqlbench.service.runner import query_runner
from sqlbench.service.runner.query_runner import QueryRunner
from tests.conftest import FakeClock, RecordingEngine


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(query_runner, "time", types.SimpleNamespace(perf_counter=fake))
    return fake


def calls_named(engine: RecordingEngine, name: str):
    return [sql for call, sql in engine.calls if call == name]


class TestTiming:

    def test_one_duration_per_iteration(self, clock, output_path):
        engine = RecordingEngine(clock=clock, statement_seconds=0.25)
        batch = StatementBatch.from_text("select 1")
        durations = QueryRunner(engine, batch, 4, 3, output_path).run()
        assert durations == [250, 250, 250]

    def test_multipart_durations_are_summed(self, clock, output_path):
        engine = RecordingEngine(clock=clock, statement_seconds=0.25)
        batch = StatementBatch.from_text("select 1; select 2")
        runner = QueryRunner(engine, batch, 15, 2, output_path)
        assert runner.run() == [500, 500]
        assert runner.durations == [500, 500]

    def test_statements_run_in_order_every_iteration(self, output_path):
        engine = RecordingEngine()
        batch = StatementBatch.from_text("select 1; select 2")
        QueryRunner(engine, batch, 1, 2, output_path).run()
        assert calls_named(engine, "submit") == ["select 1", "select 2", "select 1", "select 2"]

    def test_durations_non_negative_with_real_clock(self, output_path):
        engine = RecordingEngine()
        durations = QueryRunner(engine, StatementBatch.from_text("select 1"), 1, 5, output_path).run()
        assert len(durations) == 5
        assert all(d >= 0 for d in durations)


class TestArtifacts:

    def test_single_statement_artifacts(self, output_path):
        engine = RecordingEngine()
        QueryRunner(engine, StatementBatch.from_text("select 1"), 6, 3, output_path).run()
        names = sorted(p.name for p in output_path.iterdir())
        assert names == ["q6.csv", "q6_logical_plan.qpml", "q6_logical_plan.txt"]

    def test_plans_only_captured_on_first_iteration(self, output_path):
        engine = RecordingEngine()
        QueryRunner(engine, StatementBatch.from_text("select 1; select 2"), 2, 3, output_path).run()
        assert calls_named(engine, "explain") == ["select 1", "select 2"]

    def test_multipart_artifacts(self, output_path):
        engine = RecordingEngine()
        QueryRunner(engine, StatementBatch.from_text("select 1; select 2"), 15, 1, output_path).run()
        for part in (1, 2):
            assert (output_path / f"q15_part_{part}_logical_plan.txt").exists()
            assert (output_path / f"q15_part_{part}_logical_plan.qpml").exists()
            assert (output_path / f"q15_part_{part}.csv").exists()
        assert not (output_path / "q15.csv").exists()

    def test_csv_holds_first_batch_only(self, output_path):
        engine = RecordingEngine()
        QueryRunner(engine, StatementBatch.from_text("select 1"), 1, 1, output_path).run()
        df = pd.read_csv(output_path / "q1.csv")
        assert list(df.columns) == ["sql", "n"]
        assert df["sql"].tolist() == ["select 1"]

    def test_plan_text_is_indented(self, output_path):
        engine = RecordingEngine()
        QueryRunner(engine, StatementBatch.from_text("select 1"), 1, 1, output_path).run()
        text = (output_path / "q1_logical_plan.txt").read_text(encoding="utf-8")
        assert text.splitlines() == ["PROJECTION: sql: select 1", "  SEQ_SCAN: Table: lineitem"]

    def test_empty_result_skips_csv(self, output_path):
        engine = RecordingEngine()
        QueryRunner(engine, StatementBatch.from_text("select EMPTY"), 9, 1, output_path).run()
        assert (output_path / "q9_logical_plan.txt").exists()
        assert not (output_path / "q9.csv").exists()

    def test_rerun_rewrites_identical_artifacts(self, output_path):
        batch = StatementBatch.from_text("select 1; select 2")
        QueryRunner(RecordingEngine(), batch, 3, 3, output_path).run()
        first = {p.name: p.read_bytes() for p in output_path.iterdir()}
        QueryRunner(RecordingEngine(), batch, 3, 3, output_path).run()
        second = {p.name: p.read_bytes() for p in output_path.iterdir()}
        assert first == second

    def test_unwritable_output(self, tmp_path):
        runner = QueryRunner(RecordingEngine(), StatementBatch.from_text("select 1"), 1, 1, tmp_path / "nope")
        with pytest.raises(ArtifactWriteError):
            runner.run()


class TestFailures:

    def test_engine_error_propagates(self, output_path):
        runner = QueryRunner(RecordingEngine(), StatementBatch.from_text("select FAIL"), 5, 2, output_path)
        with pytest.raises(EngineExecutionError):
            runner.run()
        assert runner.durations == []

    def test_partial_durations_survive(self, clock, output_path):
        engine = RecordingEngine(clock=clock, fail_after_submissions=2)
        runner = QueryRunner(engine, StatementBatch.from_text("select 1"), 5, 4, output_path)
        with pytest.raises(EngineExecutionError):
            runner.run()
        assert runner.durations == [250, 250]

    def test_debug_does_not_change_results(self, clock, output_path):
        engine = RecordingEngine(clock=clock)
        batch = StatementBatch.from_text("select 1")
        assert QueryRunner(engine, batch, 1, 2, output_path, debug=True).run() == [250, 250]

    def test_debug_echoes_each_statement_with_logging_silenced(self, monkeypatch, capsys, output_path):
        monkeypatch.setattr(query_runner.logger, "disabled", True)
        batch = StatementBatch.from_text("select 1; select 2")
        QueryRunner(RecordingEngine(), batch, 3, 2, output_path, debug=True).run()
        lines = capsys.readouterr().out.splitlines()
        assert lines.count("Query 3: select 1") == 2
        assert lines.count("Query 3: select 2") == 2

    def test_no_echo_without_debug(self, capsys, output_path):
        QueryRunner(RecordingEngine(), StatementBatch.from_text("select 1"), 3, 1, output_path).run()
        assert "Query 3: select 1" not in capsys.readouterr().out.splitlines()
