# app/schemas/base.py
import re
from datetime import date, datetime, time, timezone
from typing import Annotated, Any, ClassVar, Dict, Optional, Sequence, Tuple

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, model_validator

from app.utils.keys import canonicalize

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")
DATETIME_PATTERN = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})"
    r"T(?P<clock>([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?)"
    r"(\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})?$"
)

DATE_MESSAGE = "must be a valid date (YYYY-MM-DD)"
TIME_MESSAGE = "must be a valid time (HH:MM or HH:MM:SS)"
DATETIME_MESSAGE = "must be a valid date and time (YYYY-MM-DDTHH:MM[:SS])"


def field_label(name: str) -> str:
    return str(name).replace("_", " ").capitalize()


# --- Strict temporal shapes ---
# Field-level messages are phrased as predicates; the field label is
# prepended when errors are turned into reasons.


def _date_shape(value: Any) -> Any:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and DATE_PATTERN.match(value):
        return value
    raise ValueError(DATE_MESSAGE)


def _time_shape(value: Any) -> Any:
    if isinstance(value, time):
        return value
    if isinstance(value, str) and TIME_PATTERN.match(value):
        return value
    raise ValueError(TIME_MESSAGE)


def _datetime_shape(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    match = DATETIME_PATTERN.match(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(DATETIME_MESSAGE)

    clock = match.group("clock")
    if len(clock) == 5:
        clock += ":00"
    fraction = match.group("fraction")
    if fraction:
        # Sub-microsecond digits are dropped.
        clock += "." + fraction[:6]
    return f"{match.group('date')}T{clock}{match.group('offset') or ''}"


def _assume_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


StrictDate = Annotated[date, BeforeValidator(_date_shape)]
StrictTime = Annotated[time, BeforeValidator(_time_shape)]
StrictDateTime = Annotated[datetime, BeforeValidator(_datetime_shape), AfterValidator(_assume_utc)]


def one_of(value: str, choices: Sequence[str], case_sensitive: bool = True) -> str:
    """Return the declared spelling of ``value`` or raise with the allowed set."""
    if case_sensitive:
        if value in choices:
            return value
    else:
        for choice in choices:
            if choice.lower() == value.lower():
                return choice
    raise ValueError(f"must be one of: {', '.join(choices)}")


class ChildItem(BaseModel):
    """
    Base for one entry of a child collection in a create/update payload.

    Keys are accepted in camelCase, PascalCase or snake_case. A bare scalar
    (e.g. ``"Go"`` in a languages list) is wrapped into ``scalar_field``.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    scalar_field: ClassVar[Optional[str]] = None
    key_aliases: ClassVar[Dict[str, str]] = {}

    @model_validator(mode="before")
    @classmethod
    def _canonical_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return canonicalize(data, cls.model_fields.keys(), cls.key_aliases)
        if cls.scalar_field is not None and isinstance(data, (str, int, float)):
            return {cls.scalar_field: data}
        return data


class AggregatePayload(ChildItem):
    """
    Base for a parent create/update payload.

    Parent fields sit at the top level next to the child collections named
    in ``child_collections``. A null or blank value counts as absent, so
    required fields report as missing and optional ones take their default.
    A collection that is absent is not supplied at all, which an update
    treats differently from an empty list.
    """

    child_collections: ClassVar[Tuple[str, ...]] = ()
    # Fields an update keeps from the stored row when the payload omits them.
    sticky_fields: ClassVar[Tuple[str, ...]] = ("status",)

    @model_validator(mode="before")
    @classmethod
    def _canonical_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = canonicalize(data, cls.model_fields.keys(), cls.key_aliases)
        return {
            key: value.strip() if isinstance(value, str) else value
            for key, value in data.items()
            if not is_blank(value)
        }

    def parent_fields(self) -> dict:
        return self.model_dump(exclude=set(self.child_collections))

    def supplied_collections(self) -> dict:
        collections = {}
        for name in self.child_collections:
            items = getattr(self, name)
            if items is not None:
                collections[name] = items
        return collections


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
