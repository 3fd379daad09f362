"""Template engine for helper substitution.

Files ending in ``.tmpl`` may call registered helpers:

    var version = "{{ build_version }}";
    var logo = "{{ asset_url(images/logo.png) }}";

Arguments are split on commas, stripped, and unquoted before the helper
is called with them. The helper's result is inserted with ``str()``.
"""

import re
from typing import Any

from ..registry import EngineRegistry
from .base import Engine

_HELPER_CALL = re.compile(r"\{\{\s*(\w+)\s*(?:\(([^)]*)\))?\s*\}\}")


def _parse_args(raw: str | None) -> list[str]:
    if not raw or not raw.strip():
        return []
    return [arg.strip().strip("'\"") for arg in raw.split(",")]


class TemplateEngine(Engine):
    """Engine rendering ``{{ helper }}`` placeholders.

    Config:
        strict: Raise on placeholders naming an unknown helper (default
            True). When False, such placeholders are left untouched.
    """

    extensions = (".tmpl",)

    def render(self, source: str, context: dict[str, Any]) -> str:
        helpers = context.get("helpers", {})
        strict = self.config.get("strict", True)

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in helpers:
                if strict:
                    raise ValueError(
                        f"Unknown helper '{name}' in {context.get('logical_path', 'template')}"
                    )
                return match.group(0)
            return str(helpers[name](*_parse_args(match.group(2))))

        return _HELPER_CALL.sub(substitute, source)


# Auto-register at module import
EngineRegistry.register_engine("Template", TemplateEngine)
