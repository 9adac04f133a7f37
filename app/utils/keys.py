# app/utils/keys.py
"""
Request key normalization.

Admin clients send the same field as ``eventDate``, ``EventDate``,
``eventdate`` or ``event_date``. Keys are compared with underscores removed
and case folded, then mapped onto one canonical snake_case name.
"""
from typing import Any, Iterable, Mapping, Optional


def fold_key(key: Any) -> str:
    return str(key).replace("_", "").replace("-", "").lower()


def canonicalize(
    data: Mapping[str, Any],
    fields: Iterable[str],
    aliases: Optional[Mapping[str, str]] = None,
) -> dict:
    """
    Return ``data`` re-keyed onto ``fields``; unknown keys are dropped.

    When several spellings of one field are present, the first non-null
    value wins.
    """
    lookup = {fold_key(name): name for name in fields}
    for alias, target in (aliases or {}).items():
        lookup.setdefault(fold_key(alias), target)

    result: dict = {}
    for key, value in data.items():
        name = lookup.get(fold_key(key))
        if name is None:
            continue
        if result.get(name) is None:
            result[name] = value
    return result
