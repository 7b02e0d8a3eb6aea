"""Pytest configuration for jsnet test suite."""

import sys
from pathlib import Path

# Add repository root to path for jsnet imports
sys.path.insert(0, str(Path(__file__).parent.parent))
