from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Sub:
    """Replacement for one ``{{NAME}}`` token.

    ``every`` selects replace-all; otherwise only the first occurrence is
    replaced. Which one applies is fixed per placeholder by the page templates.
    """

    value: str
    every: bool = False


def token(name: str) -> str:
    return "{{" + name + "}}"


def render(template: str, bindings: Mapping[str, Sub]) -> str:
    """Literal placeholder substitution, applied in binding order.

    Values are not escaped: a token that appears inside an earlier value is
    visible to later bindings.
    """
    out = template
    for name, sub in bindings.items():
        out = out.replace(token(name), str(sub.value), -1 if sub.every else 1)
    return out


def first(value: Any) -> Sub:
    return Sub(str(value))


def every(value: Any) -> Sub:
    return Sub(str(value), every=True)
