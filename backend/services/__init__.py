"""
AutoTrack - Backend Services
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial services module
"""

from . import auth
from . import inspection
from . import storage
