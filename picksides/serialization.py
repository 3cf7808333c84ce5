"""
Plain-data conversion for picksides result types.

Analyses, scans, modulation results, sessions and transcripts all expose
``to_dict()`` through SerializableMixin so callers can log or persist them
as JSON. Emotional states become their names, tuples and read-only
mappings become lists and dicts, and timestamps become ISO 8601 strings.

``from_dict()`` is the inverse for flat records such as StateProgression
and DebateRound: unknown keys are dropped and state names are turned back
into EmotionalState members.

    DebateRound(number=2, kind="counter", pro="...", con="...",
                pro_state=EmotionalState.ENGAGED).to_dict()["pro_state"]
    # "engaged"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, Type, TypeVar, Union, get_args, get_origin, get_type_hints

T = TypeVar("T", bound="SerializableMixin")


def serialize_value(value: Any) -> Any:
    """Convert ``value`` to JSON-compatible data."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if is_dataclass(value) and hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    if isinstance(value, Mapping):
        return {k: serialize_value(v) for k, v in value.items()}
    return value


def _enum_type(annotation: Any) -> Type[Enum] | None:
    """The Enum class named by ``annotation`` or ``Optional[annotation]``."""
    if get_origin(annotation) is Union:
        members = [a for a in get_args(annotation) if a is not type(None)]
        annotation = members[0] if len(members) == 1 else None
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return annotation
    return None


def deserialize_value(value: Any, annotation: Any) -> Any:
    """Turn a serialized enum value or name back into its member.

    Matching ignores case, so "ENGAGED" and "engaged" both give
    EmotionalState.ENGAGED. Unmatched values and non-enum fields are
    returned unchanged.
    """
    enum_type = _enum_type(annotation)
    if enum_type is None or not isinstance(value, str):
        return value
    wanted = value.strip().lower()
    for member in enum_type:
        if str(member.value).lower() == wanted or member.name.lower() == wanted:
            return member
    return value


class SerializableMixin:
    """``to_dict`` / ``from_dict`` for dataclasses.

    Fields whose names start with an underscore, or that are listed in
    ``_exclude_fields``, are left out of ``to_dict``.
    """

    _exclude_fields: ClassVar[tuple[str, ...]] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary.

        Raises:
            TypeError: If the class is not a dataclass
        """
        if not is_dataclass(self):
            raise TypeError(f"{self.__class__.__name__} must be a dataclass")
        return {
            f.name: serialize_value(getattr(self, f.name))
            for f in fields(self)
            if not f.name.startswith("_") and f.name not in self._exclude_fields
        }

    @classmethod
    def from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:
        """Build an instance from ``data``, ignoring unknown keys.

        Raises:
            TypeError: If the class is not a dataclass
        """
        if not is_dataclass(cls):
            raise TypeError(f"{cls.__name__} must be a dataclass")
        hints = get_type_hints(cls)
        return cls(
            **{
                f.name: deserialize_value(data[f.name], hints.get(f.name))
                for f in fields(cls)
                if f.init and f.name in data
            }
        )


__all__ = [
    "SerializableMixin",
    "serialize_value",
    "deserialize_value",
]
