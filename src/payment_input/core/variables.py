"""
Default ``{{variable}}`` interpolation for block templates.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Optional, Protocol

from .models import Variable, VariableValue

__all__ = [
    "VariableInterpolator",
    "parse_variables",
]

_VARIABLE_PATTERN = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


class VariableInterpolator(Protocol):
    def __call__(
        self,
        template: Optional[str],
        *,
        variables: Iterable[Variable],
        session_store: Any = None,
    ) -> str: ...


def _stringify(value: VariableValue) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(item for item in value if item is not None)
    return value


def parse_variables(
    template: Optional[str],
    *,
    variables: Iterable[Variable],
    session_store: Any = None,
) -> str:
    """
    Replace every ``{{name}}`` in ``template`` with the matching variable value.

    Unknown and unset variables render as an empty string. ``session_store`` is
    accepted for interface compatibility and is not used by this implementation.
    """
    if not template:
        return ""
    by_name = {variable.name: variable.value for variable in variables}

    def _replace(match: re.Match[str]) -> str:
        return _stringify(by_name.get(match.group(1)))

    return _VARIABLE_PATTERN.sub(_replace, template)
