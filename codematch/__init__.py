"""
CodeMatch API

Coding-partner matching service: compatibility scoring, recommendations,
match lifecycle, match profiles and daily-capped reputation points.
"""

from .config import API_VERSION

__version__ = API_VERSION
