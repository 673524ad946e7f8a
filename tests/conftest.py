"""
Pytest configuration for the test suite.
"""

import sys
from pathlib import Path

import pytest

# tests/ sits in the repository root, so the parent is the import root
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))


@pytest.fixture
def cs():
    """Empty constraint system over the default field."""
    from circuit.constraint_system import ConstraintSystem
    return ConstraintSystem()
