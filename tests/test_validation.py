import pytest

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from school_api.api.validation import validate_point, validate_school
from school_api.core.errors import ValidationFailed


"""Unit tests for the request validation rules (school_api.api.validation)."""


@pytest.fixture
def valid_school():
    """A body that passes every rule. - valid_school"""
    return {"name": "Lincoln High", "address": "1 Main St", "latitude": 40.0, "longitude": -75.0}


def _failures(exc_info):
    return [(d["field"], d["msg"]) for d in exc_info.value.details]


def test_valid_school_is_normalized(valid_school):
    valid_school.update(name="  Lincoln High  ", address="\t1 Main St\n", latitude="40", longitude=-75)

    school = validate_school(valid_school)

    assert school == {"name": "Lincoln High", "address": "1 Main St", "latitude": 40.0, "longitude": -75.0}
    assert isinstance(school["latitude"], float)
    assert isinstance(school["longitude"], float)


def test_range_bounds_are_inclusive(valid_school):
    for lat, lon in [(90, 180), (-90, -180), ("-90.0", "180.0")]:
        valid_school.update(latitude=lat, longitude=lon)
        school = validate_school(valid_school)
        assert school["latitude"] in (90.0, -90.0)
        assert school["longitude"] in (180.0, -180.0)


def test_all_failures_are_collected():
    """Every broken field is reported in a single pass. - test_all_failures_are_collected"""
    with pytest.raises(ValidationFailed) as exc_info:
        validate_school({"name": "   ", "address": "", "latitude": 91, "longitude": -180.5})

    assert _failures(exc_info) == [
        ("name", "name is required"),
        ("address", "address is required"),
        ("latitude", "latitude must be between -90 and 90"),
        ("longitude", "longitude must be between -180 and 180"),
    ]


def test_missing_body_reports_each_field_once():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_school(None)

    assert [field for field, _ in _failures(exc_info)] == ["name", "address", "latitude", "longitude"]


def test_length_limits(valid_school):
    valid_school.update(name="n" * 256, address="a" * 501)

    with pytest.raises(ValidationFailed) as exc_info:
        validate_school(valid_school)

    assert _failures(exc_info) == [
        ("name", "name must be at most 255 characters"),
        ("address", "address must be at most 500 characters"),
    ]


def test_length_limit_applies_after_trim(valid_school):
    valid_school.update(name="  " + "n" * 255 + "  ")

    assert validate_school(valid_school)["name"] == "n" * 255


@pytest.mark.parametrize("bad", ["abc", "nan", "inf", "1e400", 10 ** 400, "1_0", "\u0661\u0662", True, [1.0], {"v": 1}])
def test_non_numeric_coordinates_are_rejected(valid_school, bad):
    valid_school["latitude"] = bad

    with pytest.raises(ValidationFailed) as exc_info:
        validate_school(valid_school)

    assert _failures(exc_info) == [("latitude", "latitude must be a number")]


def test_non_string_name_is_rejected(valid_school):
    valid_school["name"] = 12345

    with pytest.raises(ValidationFailed) as exc_info:
        validate_school(valid_school)

    assert _failures(exc_info) == [("name", "name must be a string")]


def test_validate_point_parses_query_strings():
    assert validate_point({"latitude": "12.5", "longitude": " -7 "}) == (12.5, -7.0)


def test_validate_point_missing_latitude():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_point({"latitude": None, "longitude": "10"})

    assert _failures(exc_info) == [("latitude", "latitude is required")]


def test_validate_point_empty_and_out_of_range():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_point({"latitude": "", "longitude": "200"})

    assert _failures(exc_info) == [
        ("latitude", "latitude is required"),
        ("longitude", "longitude must be between -180 and 180"),
    ]


def test_validate_point_huge_integer_is_not_a_number():
    """Integers too large for a float are a client error, not a crash. - test_validate_point_huge_integer_is_not_a_number"""
    with pytest.raises(ValidationFailed) as exc_info:
        validate_point({"latitude": 10 ** 400, "longitude": -10 ** 400})

    assert _failures(exc_info) == [
        ("latitude", "latitude must be a number"),
        ("longitude", "longitude must be a number"),
    ]


@pytest.mark.parametrize("text, expected", [("1.", 1.0), (".5", 0.5), ("+45", 45.0), ("-1.5e1", -15.0)])
def test_validate_point_accepts_plain_decimal_forms(text, expected):
    assert validate_point({"latitude": text, "longitude": "0"}) == (expected, 0.0)
