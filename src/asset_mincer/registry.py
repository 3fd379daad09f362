"""Engine registry for name-based engine lookup.

This module provides a central registry of engine classes, enabling
configuration files to refer to engines by name and automatic
discovery of the engines shipped in the ``engines`` package.

Only classes live here. Engine configuration belongs to the
environment that instantiates the engine.
"""

import importlib
import pkgutil
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import InvalidEngineError

if TYPE_CHECKING:
    from .engines.base import Engine


class EngineRegistry:
    """Central registry of engine classes.

    Engine modules register themselves when imported, and the registry
    can automatically discover all engines in the ``engines`` package.
    """

    _engines: dict[str, type["Engine"]] = {}

    @classmethod
    def register_engine(cls, name: str, engine: type["Engine"]) -> None:
        """Register an engine class under a name.

        Args:
            name: Name of the engine (e.g., 'Template')
            engine: Engine subclass

        Example:
            >>> EngineRegistry.register_engine('Template', TemplateEngine)
        """
        cls._engines[name] = engine

    @classmethod
    def get_engine(cls, name: str) -> type["Engine"]:
        """Look up an engine class by name.

        Both ``Template`` and ``TemplateEngine`` resolve to the engine
        registered as ``Template``.

        Args:
            name: Registered engine name, optionally suffixed with 'Engine'

        Returns:
            The engine class

        Raises:
            InvalidEngineError: If no engine is registered under that name
        """
        for candidate in (name, name.removesuffix("Engine")):
            if candidate in cls._engines:
                return cls._engines[candidate]
        raise InvalidEngineError(name, cls.list_engines())

    @classmethod
    def list_engines(cls) -> list[str]:
        """List all registered engine names.

        Returns:
            List of registered engine names

        Example:
            >>> EngineRegistry.list_engines()
            ['Template']
        """
        return list(cls._engines.keys())

    @classmethod
    def discover_engines(cls) -> None:
        """Auto-discover and import all engine modules.

        Every module of the ``engines`` package is imported, which
        triggers its registration. Engines whose optional dependencies
        are missing are skipped.
        """
        engines_dir = Path(__file__).parent / "engines"

        if not engines_dir.exists():
            return

        for module in pkgutil.iter_modules([str(engines_dir)]):
            if module.name == "base":
                continue
            try:
                importlib.import_module(f".engines.{module.name}", package="asset_mincer")
            except ImportError:
                # Engine dependencies not installed
                pass
