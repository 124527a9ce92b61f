"""
MatLib Test Suite

Tests for the matrix primitives, the elimination engine, eigen-analysis,
the spectral transform engine, the configuration and error layer, and the
command-line driver.
"""

import os

# Test configuration based on environment
SKIP_SLOW_TESTS = os.environ.get("SKIP_SLOW_TESTS", "false").lower() == "true"
