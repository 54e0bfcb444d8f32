"""Shared command-building policy.

Every attribute builder follows the same three-way branch:

* ``default=True``      -> ``default <keyword>`` (value ignored)
* value None or ``""``  -> ``no <keyword>``
* otherwise             -> ``<keyword> <value>``

List attributes converge by full replacement: negate what is there, then
add each desired entry.
"""
from typing import Any, Iterable, Optional

from ..errors import ValidationError


def attribute_commands(
    context: Optional[str],
    keyword: str,
    value: Any = None,
    default: bool = False,
) -> list[str]:
    """Build commands converging a single-valued attribute."""
    commands = [context] if context else []
    if default:
        commands.append(f"default {keyword}")
    elif value is None or value == "":
        commands.append(f"no {keyword}")
    else:
        commands.append(f"{keyword} {value}")
    return commands


def flag_commands(
    context: Optional[str],
    keyword: str,
    enabled: Optional[bool],
    default: bool = False,
) -> list[str]:
    """Build commands for a keyword that is either present or negated."""
    commands = [context] if context else []
    if default:
        commands.append(f"default {keyword}")
    elif enabled:
        commands.append(keyword)
    else:
        commands.append(f"no {keyword}")
    return commands


def replace_list_commands(
    context: Optional[str],
    keyword: str,
    values: Optional[Iterable[Any]],
    current: Optional[Iterable[Any]] = None,
) -> list[str]:
    """Build commands replacing every entry of a list attribute.

    With ``current`` given, each existing entry is negated individually;
    otherwise a single bare ``no <keyword>`` clears them all.
    """
    commands = [context] if context else []
    if current is None:
        commands.append(f"no {keyword}")
    else:
        commands.extend(f"no {keyword} {entry}" for entry in current)
    commands.extend(f"{keyword} {entry}" for entry in values or [])
    return commands


def parse_int(value: Any, field: str) -> Optional[int]:
    """Convert a scraped numeric field, raising ValidationError when malformed."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be numeric, got {value!r}") from None
