"""
Utility helpers: seed resolution and logging setup.
"""

from .random import resolve_seed, create_prng
from .logging import configure_logging

__all__ = ['resolve_seed', 'create_prng', 'configure_logging']
