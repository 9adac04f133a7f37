# app/utils/validators.py
"""
Validation and normalization of admin create/update payloads.

``validate(payload, kind)`` never raises for bad input: it returns either
``Ok`` with a normalized payload ready to be written, or ``Invalid`` with
every reason the payload was rejected. The checks themselves live on the
pydantic payload models in ``app.schemas``; this module turns their
errors into client-facing reasons.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Type, Union

from pydantic import ValidationError

from app.constants.catalog import EntityKind
from app.schemas.base import (
    DATE_MESSAGE,
    DATETIME_MESSAGE,
    TIME_MESSAGE,
    AggregatePayload,
    ChildItem,
    field_label,
    is_blank,
)
from app.schemas.competition import CompetitionCreate
from app.schemas.course import CourseCreate
from app.schemas.event import EventCreate
from app.schemas.exam import ExamCreate
from app.utils.keys import canonicalize

PAYLOAD_MODELS: Dict[EntityKind, Type[AggregatePayload]] = {
    EntityKind.event: EventCreate,
    EntityKind.course: CourseCreate,
    EntityKind.exam: ExamCreate,
    EntityKind.competition: CompetitionCreate,
}

# pydantic error type prefix -> predicate appended to the field label
TYPE_PHRASES = (
    ("datetime", DATETIME_MESSAGE),
    ("date", DATE_MESSAGE),
    ("time", TIME_MESSAGE),
    ("int", "must be a whole number"),
    ("decimal", "must be a number"),
    ("finite_number", "must be a number"),
    ("float", "must be a number"),
    ("bool", "must be true or false"),
    ("string_type", "must be text"),
    ("list_type", "must be a list"),
)


# --- Results ---


@dataclass(frozen=True)
class NormalizedPayload:
    fields: Dict[str, Any]
    # Only collections present in the payload; an absent collection is left
    # untouched by an update.
    collections: Dict[str, List[ChildItem]]


@dataclass(frozen=True)
class Ok:
    payload: NormalizedPayload
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Invalid:
    reasons: List[str]
    ok: ClassVar[bool] = False


ValidationOutcome = Union[Ok, Invalid]


# --- Error collapsing ---


def _message(error: Mapping[str, Any]) -> str:
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return error["msg"]


def _phrase(error: Mapping[str, Any]) -> str:
    kind = error["type"]
    ctx = error.get("ctx") or {}
    if kind == "value_error":
        return str(ctx["error"])
    if kind == "greater_than_equal":
        return f"must be at least {ctx['ge']}"
    if kind == "string_too_long":
        return f"must be at most {ctx['max_length']} characters"
    for prefix, phrase in TYPE_PHRASES:
        if kind.startswith(prefix):
            return phrase
    return error["msg"]


def _error_location(loc: Sequence[Any]) -> str:
    path = ""
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def collect_reasons(exc: ValidationError) -> List[str]:
    """
    One reason per error. Missing top-level fields are folded into a single
    leading reason; child item errors carry their position.
    """
    missing: List[str] = []
    reasons: List[str] = []
    for error in exc.errors():
        loc = error["loc"]
        if not loc:
            reasons.append(_message(error))
        elif len(loc) == 1:
            label = field_label(loc[0])
            if error["type"] == "missing":
                missing.append(label)
            else:
                reasons.append(f"{label} {_phrase(error)}")
        else:
            reasons.append(f"{loc[0]}{_error_location(loc[1:])}: {_message(error)}")

    if missing:
        reasons.insert(0, f"Missing required fields: {', '.join(missing)}")
    return reasons


# --- Entry point ---


def validate(
    payload: Any,
    entity_kind: Union[EntityKind, str],
    current: Optional[Mapping[str, Any]] = None,
) -> ValidationOutcome:
    """
    Check ``payload`` against the model for ``entity_kind``.

    Keys are matched regardless of case and underscores. All problems are
    reported together; nothing is partially accepted. On update, ``current``
    holds the stored row: the model's sticky fields fall back to it instead
    of to their defaults.
    """
    model = PAYLOAD_MODELS[EntityKind(entity_kind)]
    if not isinstance(payload, dict):
        return Invalid(["Payload must be an object"])
    if isinstance(payload.get("parent"), dict):
        # {"parent": {...fields}, "languages": [...]} call shape
        rest = {key: value for key, value in payload.items() if key != "parent"}
        payload = {**payload["parent"], **rest}

    data = canonicalize(payload, model.model_fields.keys(), model.key_aliases)
    if current is not None:
        for name in model.sticky_fields:
            if is_blank(data.get(name)):
                data[name] = current.get(name)

    try:
        parsed = model.model_validate(data)
    except ValidationError as exc:
        return Invalid(collect_reasons(exc))

    return Ok(NormalizedPayload(parsed.parent_fields(), parsed.supplied_collections()))
