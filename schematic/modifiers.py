"""Built-in variable modifiers."""

from __future__ import annotations

from typing import Callable, Sequence

ModifierFunction = Callable[[list[str], list[str]], list[str]]


class ModifierError(ValueError):
    """Raised when a modifier is called with unusable arguments."""


def strip_last_prefix(variable: Sequence[str], args: Sequence[str]) -> list[str]:
    """Strip the first matching prefix in ``args`` from the last segment of ``variable``."""
    if not args:
        raise ModifierError(
            f"strip_last_prefix: expected at least 1 argument, found {len(args)}"
        )
    result = list(variable)
    if not result:
        return result
    last = result[-1]
    prefix = next((p for p in args if last.startswith(p)), None)
    if prefix is not None:
        result[-1] = last[len(prefix):]
    return result


def predefined_modifiers() -> dict[str, ModifierFunction]:
    """Return a fresh mapping of the built-in modifiers by name."""
    return {"strip_last_prefix": strip_last_prefix}