import re
from math import isfinite
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from school_api.core.errors import ValidationFailed


"""Request validation for the school endpoints.

Every field carries an ordered list of independent (predicate, message) rules.
All rules of all fields are evaluated before responding, so a request with
several problems reports each of them. Type and range rules pass when the
value is absent; the "required" rule alone reports a missing field.
- validation
"""

Rule = Tuple[Callable[[Any], bool], str]

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class FieldRules(NamedTuple):
    """Normalizer plus ordered rules for one input field. - field_rules"""
    field: str
    normalize: Callable[[Any], Any]
    rules: Sequence[Rule]


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _to_float(value: Any) -> Any:
    """Coerce numbers and numeric strings to float; anything else is returned unchanged. - to_float"""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # plain ASCII decimals only; float() alone also takes "1_0" and non-ASCII digits
        if not _DECIMAL.fullmatch(text):
            return value
        number = float(text)
    else:
        return value
    return number if isfinite(number) else value


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _is_text(value: Any) -> bool:
    return not _present(value) or isinstance(value, str)


def _max_length(limit: int) -> Callable[[Any], bool]:
    return lambda value: not isinstance(value, str) or len(value) <= limit


def _is_number(value: Any) -> bool:
    return not _present(value) or isinstance(value, float)


def _between(low: float, high: float) -> Callable[[Any], bool]:
    return lambda value: not isinstance(value, float) or low <= value <= high


def _text_field(field: str, max_length: int) -> FieldRules:
    return FieldRules(
        field,
        _strip,
        [
            (_present, f"{field} is required"),
            (_is_text, f"{field} must be a string"),
            (_max_length(max_length), f"{field} must be at most {max_length} characters"),
        ],
    )


def _coordinate_field(field: str, limit: float) -> FieldRules:
    return FieldRules(
        field,
        _to_float,
        [
            (_present, f"{field} is required"),
            (_is_number, f"{field} must be a number"),
            (_between(-limit, limit), f"{field} must be between {-limit:g} and {limit:g}"),
        ],
    )


LATITUDE = _coordinate_field("latitude", 90)
LONGITUDE = _coordinate_field("longitude", 180)

SCHOOL_FIELDS: List[FieldRules] = [
    _text_field("name", 255),
    _text_field("address", 500),
    LATITUDE,
    LONGITUDE,
]

POINT_FIELDS: List[FieldRules] = [LATITUDE, LONGITUDE]


def check_fields(data: Mapping[str, Any], fields: Sequence[FieldRules]) -> Tuple[Dict[str, Any], List[Dict[str, str]]]:
    """Normalize and check every field, collecting all failures. - check_fields

    Returns (normalized values, error details); details is empty on success.
    """
    values: Dict[str, Any] = {}
    details: List[Dict[str, str]] = []
    for spec in fields:
        value = spec.normalize(data.get(spec.field))
        values[spec.field] = value
        for predicate, message in spec.rules:
            if not predicate(value):
                details.append({"field": spec.field, "msg": message})
    return values, details


def validate_school(payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Validate an addSchool body, returning trimmed text and float coordinates. - validate_school"""
    values, details = check_fields(payload or {}, SCHOOL_FIELDS)
    if details:
        raise ValidationFailed(details)
    return values


def validate_point(params: Mapping[str, Any]) -> Tuple[float, float]:
    """Validate the reference point of listSchools. - validate_point"""
    values, details = check_fields(params, POINT_FIELDS)
    if details:
        raise ValidationFailed(details)
    return values["latitude"], values["longitude"]
