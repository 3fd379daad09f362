"""Engines for the asset environment.

This package contains the engine base class. Concrete engines live in
sibling modules and register themselves with EngineRegistry when
imported by EngineRegistry.discover_engines().
"""

from .base import Engine

__all__ = ["Engine"]
