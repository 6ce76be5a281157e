"""
Minimal {{variable}} templating shared by the email and Slack dispatchers.

Grammar:
- {{name}}                      substituted with str(data[name]), "" if absent
- {{#if name}}...{{/if}}        body kept iff data[name] is truthy
- {{#each name}}...{{/each}}    body repeated per item of a list/tuple, {{this}} = item

Blocks do not nest. Unterminated blocks are left in the output untouched.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping

EACH_RE = re.compile(r"\{\{#each\s+(\w+)\s*\}\}(.*?)\{\{/each\}\}", re.DOTALL)
IF_RE = re.compile(r"\{\{#if\s+(\w+)\s*\}\}(.*?)\{\{/if\}\}", re.DOTALL)
VAR_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")
THIS_RE = re.compile(r"\{\{\s*this\s*\}\}")
# Bound loop items sit behind these markers until variables are substituted.
ITEM_RE = re.compile(r"\x00(\d+)\x00")


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


def _expand_each(template: str, data: Mapping[str, Any], bound: list[str]) -> str:
    def bind(item: Any) -> str:
        bound.append(_to_str(item))
        return f"\x00{len(bound) - 1}\x00"

    def repl(match: re.Match) -> str:
        items = data.get(match.group(1))
        if not isinstance(items, (list, tuple)):
            return ""
        body = match.group(2)
        return "".join(THIS_RE.sub(lambda _: bind(item), body) for item in items)

    return EACH_RE.sub(repl, template)


def _expand_if(template: str, data: Mapping[str, Any]) -> str:
    return IF_RE.sub(lambda m: m.group(2) if data.get(m.group(1)) else "", template)


def _substitute(template: str, data: Mapping[str, Any]) -> str:
    return VAR_RE.sub(lambda m: _to_str(data.get(m.group(1))), template)


def _restore_items(template: str, bound: list[str]) -> str:
    def repl(match: re.Match) -> str:
        index = int(match.group(1))
        return bound[index] if index < len(bound) else match.group(0)

    return ITEM_RE.sub(repl, template)


def render(template: str, data: Mapping[str, Any] | None = None) -> str:
    """Expand loops, then conditionals, then plain variables.

    Loop item values are inserted literally: placeholders inside an item are
    not expanded.

    Args:
        template: Template source.
        data: Flat mapping of placeholder name to value.
    """
    data = data or {}
    bound: list[str] = []
    result = _expand_each(template, data, bound)
    result = _expand_if(result, data)
    result = _substitute(result, data)
    return _restore_items(result, bound)


@dataclass(frozen=True)
class Template:
    """A template string bound once and rendered many times."""

    source: str

    def render(self, data: Mapping[str, Any] | None = None) -> str:
        return render(self.source, data)

    def __str__(self) -> str:
        return self.source


def render_any(template: "str | Template", data: Mapping[str, Any] | None = None) -> str:
    if isinstance(template, Template):
        return template.render(data)
    return render(template, data)
