"""
Root conftest - shared pytest configuration and fixtures.
Ensures the facepass package is discoverable when running pytest from the repository root.
"""
import sys
from pathlib import Path

# Ensure repository root is in path for 'from facepass...' imports
_root = Path(__file__).resolve().parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))
