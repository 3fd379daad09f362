"""Base engine class for transforming asset sources.

This module defines the base interface for engines that turn an
engine-specific source (e.g. a ``.tmpl`` template) into plain
JavaScript, CSS or any other output content.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class Engine(ABC):
    """Abstract base class for asset engines.

    An engine is selected by file extension. ``app.js.tmpl`` is rendered
    by the engine registered for ``.tmpl`` and yields ``app.js``.

    Engine configuration is given per environment at construction time,
    so two builds in one process never share engine settings.
    """

    extensions: ClassVar[tuple[str, ...]] = ()

    def __init__(self, config: dict[str, Any] | None = None):
        self.config = dict(config or {})

    @abstractmethod
    def render(self, source: str, context: dict[str, Any]) -> str:
        """Render engine source into output content.

        Args:
            source: Source text of the asset
            context: Render context; ``helpers`` maps helper names to
                callables, ``logical_path`` names the asset being built

        Returns:
            The rendered content

        Raises:
            Exception: If rendering fails
        """
        pass
