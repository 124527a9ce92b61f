#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Shim for tools that still invoke setup.py directly.

All package metadata for matlib-kernel lives in pyproject.toml.
"""

import setuptools

if __name__ == "__main__":
    setuptools.setup()
