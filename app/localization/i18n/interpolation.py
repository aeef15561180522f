"""Placeholder substitution and bidirectional text embedding."""

import re
from typing import Any, Mapping, Optional

from localization.i18n.models import TextDirection
from localization.i18n.registry import LocaleRegistry

RLE = "\u202b"  # Right-to-Left Embedding
LRE = "\u202a"  # Left-to-Right Embedding
PDF = "\u202c"  # Pop Directional Formatting


def embed_direction(text: str, direction: TextDirection) -> str:
    """Wrap ``text`` in the embedding marks for ``direction``."""
    opening = RLE if direction is TextDirection.RTL else LRE
    return f"{opening}{text}{PDF}"


def strip_direction_marks(text: str) -> str:
    """Remove embedding marks added by ``embed_direction``."""
    return text.translate({ord(RLE): None, ord(LRE): None, ord(PDF): None})


class Interpolator:
    """Replaces ``{{name}}`` placeholders with caller-supplied values.

    Unknown placeholders, and placeholders whose value is None, are left
    untouched. Results for right-to-left locales are wrapped in RLE/PDF so
    they render correctly inside left-to-right UI.
    """

    def __init__(
        self,
        registry: LocaleRegistry,
        prefix: str = "{{",
        suffix: str = "}}",
    ):
        self.registry = registry
        self.pattern = re.compile(re.escape(prefix) + r"(\w+)" + re.escape(suffix))

    def substitute(self, template: str, params: Optional[Mapping[str, Any]] = None) -> str:
        if not params:
            return template

        def _replace(match: "re.Match[str]") -> str:
            value = params.get(match.group(1))
            return match.group(0) if value is None else str(value)

        return self.pattern.sub(_replace, template)

    def interpolate(
        self,
        template: str,
        params: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        result = self.substitute(template, params)
        if locale and self.registry.is_right_to_left(locale):
            result = embed_direction(result, TextDirection.RTL)
        return result
