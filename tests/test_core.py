# tests/test_core.py
"""
Tests for the core layer: configuration management, the exception and
warning hierarchy, result containers and kernel dispatch.
"""

import json
import logging
import warnings

import numpy as np
import pytest

import matlib
from matlib.core.acceleration import numba_enabled, select_kernel
from matlib.core.config import (
    ConfigManager, get_config, get_config_manager, get_numerical_config,
    reset_config, save_config, set_config, to_dict
)
from matlib.core.exceptions import (
    ConfigurationError, ConvergenceError, ConvergenceWarning, DataError,
    DimensionError, MatLibError, MatLibWarning, NumericError, NumericWarning,
    ParameterError, SingularMatrixError, TransformLengthError,
    raise_dimension_error, warn_convergence
)
from matlib.core.results import EliminationResult, EliminationStatus, PowerIterationResult
from matlib.linalg import _numba_core
from matlib.version import VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH


class TestConfiguration:
    """Tests for the layered configuration manager."""

    def test_defaults(self):
        numerical = get_numerical_config()
        assert numerical.pivot_tolerance == 1e-12
        assert numerical.jacobi_tolerance == 1e-4
        assert numerical.jacobi_max_iterations == 1000
        assert get_config("performance", "enable_numba") is True

    def test_unknown_option_returns_default(self):
        assert get_config("numerical", "no_such_option", 42) == 42
        assert get_config("no_such_section", "x") is None

    def test_set_and_reset(self):
        set_config("numerical", "jacobi_tolerance", 1e-8)
        assert get_config("numerical", "jacobi_tolerance") == 1e-8
        assert "numerical.jacobi_tolerance" in get_config_manager().get_modified_options()
        reset_config("numerical", "jacobi_tolerance")
        assert get_config("numerical", "jacobi_tolerance") == 1e-4

    def test_set_coerces_strings(self):
        set_config("numerical", "power_max_iterations", "25")
        assert get_config("numerical", "power_max_iterations") == 25
        set_config("performance", "enable_numba", "false")
        assert get_config("performance", "enable_numba") is False

    def test_set_invalid_value_restores_previous(self):
        with pytest.raises(ConfigurationError):
            set_config("numerical", "jacobi_tolerance", -1.0)
        assert get_config("numerical", "jacobi_tolerance") == 1e-4

    def test_set_unconvertible_value(self):
        with pytest.raises(ConfigurationError):
            set_config("numerical", "power_max_iterations", "many")

    def test_set_unknown_option(self):
        with pytest.raises(ConfigurationError):
            set_config("numerical", "nope", 1)
        with pytest.raises(ConfigurationError):
            set_config("nope", "nope", 1)

    def test_log_level_upper_cased(self):
        set_config("logging", "log_level", "debug")
        assert get_config("logging", "log_level") == "DEBUG"
        assert logging.getLogger("matlib").level == logging.DEBUG

    def test_to_dict(self):
        config = to_dict()
        assert set(config) == {"numerical", "performance", "logging"}
        assert config["numerical"]["pivot_tolerance"] == 1e-12

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MATLIB_CONFIG_FILE", str(tmp_path / "missing.json"))
        monkeypatch.setenv("MATLIB_NUMERICAL_JACOBI_TOLERANCE", "1e-8")
        monkeypatch.setenv("MATLIB_PERFORMANCE_ENABLE_NUMBA", "0")
        manager = ConfigManager()
        manager.initialize()
        assert manager.get("numerical", "jacobi_tolerance") == 1e-8
        assert manager.get("performance", "enable_numba") is False

    def test_invalid_environment_value_reset(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MATLIB_CONFIG_FILE", str(tmp_path / "missing.json"))
        monkeypatch.setenv("MATLIB_NUMERICAL_JACOBI_MAX_ITERATIONS", "-5")
        manager = ConfigManager()
        manager.initialize()
        assert manager.get("numerical", "jacobi_max_iterations") == 1000

    def test_user_config_file(self, monkeypatch, tmp_path):
        config_file = tmp_path / "matlib_config.json"
        config_file.write_text(json.dumps({"numerical": {"power_tolerance": 1e-6}}))
        monkeypatch.setenv("MATLIB_CONFIG_FILE", str(config_file))
        manager = ConfigManager()
        manager.initialize()
        assert manager.get("numerical", "power_tolerance") == 1e-6
        assert manager.get_config_file() == config_file

    def test_save_config(self, monkeypatch, tmp_path):
        config_file = tmp_path / "saved" / "matlib_config.json"
        manager = get_config_manager()
        monkeypatch.setattr(manager, "_config_file", config_file)
        set_config("numerical", "pivot_tolerance", 1e-10)
        assert save_config() == config_file
        saved = json.loads(config_file.read_text())
        assert saved["numerical"]["pivot_tolerance"] == 1e-10

    def test_package_helpers(self):
        matlib.enable_numba(False)
        assert not numba_enabled()
        matlib.set_log_level(logging.ERROR)
        assert get_config("logging", "log_level") == "ERROR"
        assert matlib.get_version() == matlib.__version__

    def test_version_metadata(self):
        assert matlib.__version__ == f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"
        assert matlib.__title__ == "MatLib"


class TestKernelDispatch:
    """Tests for switching between compiled and pure-Python kernels."""

    def test_compiled_by_default(self):
        assert select_kernel(_numba_core.find_pivot) is _numba_core.find_pivot

    def test_python_when_disabled(self):
        set_config("performance", "enable_numba", False)
        assert select_kernel(_numba_core.find_pivot) is _numba_core.find_pivot.py_func

    def test_same_result_either_way(self, rng):
        a = rng.standard_normal((6, 6))
        compiled = _numba_core.find_largest_off_diagonal(a)
        interpreted = _numba_core.find_largest_off_diagonal.py_func(a)
        assert compiled[:2] == interpreted[:2]
        assert compiled[2] == pytest.approx(interpreted[2])


class TestExceptions:
    """Tests for the exception and warning hierarchy."""

    @pytest.mark.parametrize("error_class", [
        DimensionError, SingularMatrixError, TransformLengthError, ParameterError,
        ConvergenceError, NumericError, DataError, ConfigurationError
    ])
    def test_hierarchy(self, error_class):
        assert issubclass(error_class, MatLibError)

    def test_message_details_and_context(self):
        error = MatLibError("failed", details="more", context={"key": "value"})
        text = str(error)
        assert error.message == "failed"
        assert "Details: more" in text
        assert "key: value" in text
        assert "Location:" in text

    def test_location_points_past_helpers(self):
        with pytest.raises(DimensionError) as excinfo:
            raise_dimension_error("bad shape", array_name="a", actual_shape=(2, 3))
        assert "test_core.py" in str(excinfo.value)
        assert excinfo.value.actual_shape == (2, 3)

    def test_transform_length_context(self):
        error = TransformLengthError("bad length", length=6)
        assert error.context["Next Power Of Two"] == 8

    def test_warning_helpers(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            warn_convergence("slow", iterations=3, tolerance=1e-6, final_value=0.1)
        assert len(caught) == 1
        warning = caught[0].message
        assert isinstance(warning, ConvergenceWarning)
        assert isinstance(warning, MatLibWarning)
        assert warning.iterations == 3

    def test_numeric_warning_is_matlib_warning(self):
        assert issubclass(NumericWarning, MatLibWarning)


class TestResults:
    """Tests for result containers."""

    def test_elimination_result_to_dict(self):
        result = EliminationResult(
            status=EliminationStatus.SOLVED,
            coefficients=np.eye(2),
            rhs=np.ones((2, 1)),
        )
        as_dict = result.to_dict()
        assert as_dict["status"] == "solved"
        assert as_dict["coefficients"] == [[1.0, 0.0], [0.0, 1.0]]
        assert "EliminationResult" in result.summary()

    def test_partition_returns_copies(self):
        result = EliminationResult(
            status=EliminationStatus.SOLVED,
            coefficients=np.eye(2),
            rhs=np.ones((2, 1)),
        )
        left, _ = result.partition()
        left[0, 0] = 5.0
        assert result.coefficients[0, 0] == 1.0

    def test_results_are_frozen(self):
        result = PowerIterationResult(
            eigenvalue=1.0, eigenvector=np.ones((1, 1)), iterations=1,
            converged=True, residual_norm=0.0, tolerance=1e-10
        )
        with pytest.raises(AttributeError):
            result.eigenvalue = 2.0
