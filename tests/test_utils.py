# tests/test_utils.py
"""
Tests for utility functions in MatLib.

This module covers the point pair carrier and sample covariance, the
newline-delimited series reader and writer, and the command-line driver
built on them.
"""

import io

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal
from hypothesis import HealthCheck, given, settings, strategies as st

from matlib.__main__ import main
from matlib.core.exceptions import DataError, DimensionError
from matlib.spectral import normalized_cross_correlation
from matlib.utils.data_io import read_series, write_series
from matlib.utils.point import PointPair, covariance


# ---- Point Pair Tests ----

class TestPointPair:
    """Tests for the PointPair carrier."""

    def test_matrix(self):
        result = PointPair(8, -6).matrix()
        assert result.shape == (2, 1)
        assert_array_equal(result, [[8.0], [-6.0]])

    def test_from_matrix(self):
        assert PointPair.from_matrix([[1.5], [2.5]]) == PointPair(1.5, 2.5)
        assert PointPair.from_matrix(np.array([3.0, 4.0])) == PointPair(3.0, 4.0)

    def test_from_matrix_wrong_size(self):
        with pytest.raises(DimensionError):
            PointPair.from_matrix([[1.0], [2.0], [3.0]])
        with pytest.raises(DimensionError):
            PointPair.from_matrix(np.eye(2))

    def test_fields_are_floats(self):
        point = PointPair(1, 2)
        assert isinstance(point.x, float)
        assert isinstance(point.y, float)


class TestCovariance:
    """Tests for sample covariance of point pairs."""

    def test_two_points(self):
        assert_allclose(covariance([PointPair(0, 0), PointPair(2, 2)]), [[2, 2], [2, 2]])

    def test_matches_numpy(self, rng):
        data = rng.standard_normal((2, 30))
        points = [PointPair(x, y) for x, y in data.T]
        assert_allclose(covariance(points), np.cov(data), atol=1e-12)

    def test_accepts_generator(self):
        points = (PointPair(i, -i) for i in range(4))
        result = covariance(points)
        assert result[0, 1] == pytest.approx(-result[0, 0])

    def test_needs_two_points(self):
        with pytest.raises(DimensionError):
            covariance([PointPair(1, 1)])

    @given(values=st.lists(
        st.tuples(st.floats(-50, 50), st.floats(-50, 50)), min_size=2, max_size=20
    ))
    @settings(max_examples=25, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_symmetric_positive_semidefinite(self, values):
        result = covariance([PointPair(x, y) for x, y in values])
        assert_allclose(result, result.T)
        assert np.all(np.linalg.eigvalsh(result) >= -1e-8 * max(1.0, np.abs(result).max()))


# ---- Series I/O Tests ----

class TestReadSeries:
    """Tests for read_series."""

    def test_reads_values(self, write_series_file):
        path = write_series_file("values.txt", [1.5, -2, "3e-2"])
        assert_allclose(read_series(path), [1.5, -2.0, 0.03])

    def test_skips_blank_lines(self, tmp_path):
        path = tmp_path / "blank.txt"
        path.write_text("1.0\n\n2.0\n   \n3.0\n")
        assert_allclose(read_series(path), [1.0, 2.0, 3.0])

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataError):
            read_series(tmp_path / "nope.txt")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        with pytest.raises(DataError):
            read_series(path)

    def test_unparsable_line(self, write_series_file):
        path = write_series_file("bad.txt", [1.0, "abc", 3.0])
        with pytest.raises(DataError) as excinfo:
            read_series(path)
        assert excinfo.value.index == 1

    def test_multiple_columns(self, write_series_file):
        path = write_series_file("wide.txt", ["1.0,2.0", "3.0,4.0"])
        with pytest.raises(DataError):
            read_series(path)


class TestWriteSeries:
    """Tests for write_series."""

    def test_one_value_per_line(self):
        stream = io.StringIO()
        write_series(np.array([1.0, 0.25, -3.0]), stream)
        assert stream.getvalue() == "1.0\n0.25\n-3.0\n"

    def test_full_precision(self):
        stream = io.StringIO()
        write_series([1 / 3], stream)
        assert float(stream.getvalue()) == 1 / 3

    def test_defaults_to_stdout(self, capsys):
        write_series([2.0])
        assert capsys.readouterr().out == "2.0\n"


# ---- Driver Tests ----

class TestDriver:
    """Tests for python -m matlib."""

    def test_normalized_correlation_default(self, write_series_file, capsys):
        template = [1.0, -1.0, 1.0]
        signal = [0.0, 0.0, 1.0, -1.0, 1.0, 0.0, 0.0, 0.0]
        t_path = write_series_file("pulse.txt", template)
        s_path = write_series_file("signal.txt", signal)

        assert main([str(t_path), str(s_path)]) == 0

        printed = [float(line) for line in capsys.readouterr().out.splitlines()]
        assert_allclose(printed, normalized_cross_correlation(template, signal))
        assert int(np.argmax(printed)) == 2

    def test_psd_mode(self, write_series_file, capsys):
        path = write_series_file("signal.txt", [1, 0, 0, 0])
        assert main(["--mode", "psd", str(path)]) == 0
        assert_allclose([float(v) for v in capsys.readouterr().out.split()], [1, 1, 1, 1])

    def test_convolve_mode(self, write_series_file, capsys):
        path = write_series_file("signal.txt", [2, 2, 2, 2])
        assert main(["--mode", "convolve", "--window", "2", str(path)]) == 0
        assert_allclose([float(v) for v in capsys.readouterr().out.split()], [2, 2, 2, 2])

    def test_kernel_error_exit_status(self, write_series_file, capsys):
        path = write_series_file("odd.txt", [1, 2, 3])
        assert main(["--mode", "psd", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "power of two" in captured.err

    def test_missing_file_exit_status(self, tmp_path, capsys):
        assert main(["--mode", "acorr", str(tmp_path / "nope.txt")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_wrong_file_count(self, write_series_file):
        path = write_series_file("one.txt", [1.0])
        with pytest.raises(SystemExit) as excinfo:
            main([str(path)])
        assert excinfo.value.code == 2

    def test_convolve_requires_window(self, write_series_file):
        path = write_series_file("one.txt", [1.0, 2.0])
        with pytest.raises(SystemExit):
            main(["--mode", "convolve", str(path)])
