"""
Pytest configuration for local imports and shared fixture paths.
"""

# Standard Library
import os
import pathlib
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path so the street_index package
	and the top-level scripts import without installation.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
@pytest.fixture
def fixtures_dir() -> pathlib.Path:
	"""
	Directory holding the sample labels and index baseline.
	"""
	return pathlib.Path(__file__).resolve().parent / "fixtures"
