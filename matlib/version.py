# matlib/version.py
"""
MatLib version metadata, exposed as ``matlib.__version__``.

Read by the package ``__init__`` and by the Sphinx configuration; packaging
metadata proper lives in pyproject.toml.
"""

VERSION_MAJOR = 1
VERSION_MINOR = 0
VERSION_PATCH = 0

__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"

__title__ = "MatLib"
__description__ = "Dense matrix algebra, eigen-analysis and radix-2 spectral transforms"
__license__ = "MIT"
