"""
Pytest configuration for constraint system tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the repo root, so parent is the root)
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def r1cs_vectors():
    """Three-row witness whose products match the instance."""
    return {
        'a': [5, 4, 3],
        'b': [3, 4, 10],
        'c': [15, 16, 30],
    }
