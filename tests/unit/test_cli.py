"""Unit tests for the planar-traj command line."""

import csv
import io
import logging
import math

import msgspec
import numpy as np
import pytest

import planar_traj.config as cfg
from planar_traj.cli import _build_parser, _resolve_log_level, main, write_samples
from planar_traj.config import STATE_FIELDS
from planar_traj.motion import StraightSegment, run_segment
from planar_traj.protocol.types import State


def _csv_rows(text: str) -> list[dict[str, str]]:
    return list(csv.DictReader(io.StringIO(text)))


class TestStraightCommand:
    """Tests for `planar-traj straight`."""

    def test_csv_output(self, capsys):
        """Header plus one row per sample, ending on the snapped terminal."""
        code = main(
            ["--dt", "0.25", "straight", "--distance", "1", "--final-velocity", "1"]
        )
        out = capsys.readouterr().out
        rows = _csv_rows(out)

        assert code == 0
        assert out.splitlines()[0] == ",".join(("step", *STATE_FIELDS))
        expected = run_segment(StraightSegment(State(), 1.0, 1.0, dt=0.25))
        assert len(rows) == len(expected)
        assert [int(r["step"]) for r in rows] == list(range(len(rows)))
        assert float(rows[-1]["x"]) == 1.0
        assert float(rows[-1]["v"]) == 1.0
        assert float(rows[-1]["a"]) == 0.0

    def test_initial_state_options(self, capsys):
        code = main(
            [
                "--dt",
                "0.01",
                "--x",
                "2",
                "--y",
                "3",
                "--v",
                "0.5",
                "--theta",
                str(math.pi / 2),
                "straight",
                "--distance",
                "1",
                "--final-velocity",
                "0.5",
            ]
        )
        rows = _csv_rows(capsys.readouterr().out)

        assert code == 0
        assert float(rows[-1]["x"]) == pytest.approx(2.0)
        assert float(rows[-1]["y"]) == pytest.approx(4.0)

    def test_invalid_parameters_exit_code(self, capsys):
        """v0 + final velocity == 0 is rejected without output."""
        code = main(["straight", "--distance", "1", "--final-velocity", "0"])

        assert code == 2
        assert capsys.readouterr().out == ""


class TestPivotCommand:
    """Tests for `planar-traj pivot`."""

    def test_jsonl_output(self, capsys):
        code = main(
            [
                "--format",
                "jsonl",
                "--dt",
                "0.1",
                "pivot",
                "--angle",
                "1.5",
                "--duration",
                "1",
            ]
        )
        lines = capsys.readouterr().out.splitlines()
        states = [msgspec.json.decode(line, type=State) for line in lines]

        assert code == 0
        assert len(states) == math.floor(1.0 / 0.1) + 1
        assert states[0].theta == 0.0
        assert states[-1].theta == 1.5
        assert all(s.x == 0.0 and s.y == 0.0 for s in states)

    def test_zero_duration_rejected(self, capsys):
        code = main(["pivot", "--angle", "1", "--duration", "0"])

        assert code == 2


class TestArguments:
    """Argument parsing."""

    def test_missing_segment(self):
        with pytest.raises(SystemExit):
            main([])

    def test_missing_required_option(self):
        with pytest.raises(SystemExit):
            main(["straight", "--distance", "1"])


def test_write_samples_counts_rows():
    out = io.StringIO()
    segment = StraightSegment(State(v=1.0), 1.0, 1.0, dt=0.25)

    count = write_samples(segment, "csv", out)

    assert count == len(_csv_rows(out.getvalue()))
    assert segment.done


def test_csv_values_quantised_to_float32():
    out = io.StringIO()
    segment = StraightSegment(State(x=0.1, v=1.0), 1.0, 1.0, dt=0.25)

    write_samples(segment, "csv", out)
    first = _csv_rows(out.getvalue())[0]

    assert float(first["x"]) == float(np.float32(0.1 + 0.25))


def test_subcommand_options_not_abbreviated():
    """`--a` after `pivot` does not stand in for `--angle`."""
    with pytest.raises(SystemExit):
        main(["pivot", "--a", "1", "--duration", "1"])


class TestLogLevel:
    """Precedence of --log-level, -v/-q and PLANAR_TRAJ_TRACE."""

    SEGMENT = ["straight", "--distance", "1", "--final-velocity", "1"]

    @pytest.fixture(autouse=True)
    def _trace_off(self, monkeypatch):
        monkeypatch.setattr(cfg, "TRACE_ENABLED", False)

    def _level(self, *flags: str) -> int:
        return _resolve_log_level(_build_parser().parse_args([*flags, *self.SEGMENT]))

    @pytest.mark.parametrize(
        "flags,expected",
        [
            ((), logging.INFO),
            (("-q",), logging.WARNING),
            (("-v",), logging.INFO),
            (("-vv",), logging.DEBUG),
            (("--log-level", "ERROR"), logging.ERROR),
            (("-vv", "--log-level", "WARNING"), logging.WARNING),
            (("-q", "-vv"), logging.DEBUG),
        ],
    )
    def test_levels(self, flags, expected):
        assert self._level(*flags) == expected
        assert cfg.TRACE_ENABLED is False

    @pytest.mark.parametrize("flags", [("-vvv",), ("--log-level", "TRACE")])
    def test_trace_enables_step_tracing(self, flags):
        assert self._level(*flags) == cfg.TRACE
        assert cfg.TRACE_ENABLED is True

    def test_env_trace_used_without_flags(self, monkeypatch):
        monkeypatch.setattr(cfg, "TRACE_ENABLED", True)

        assert self._level() == cfg.TRACE
        assert self._level("-q") == logging.WARNING
