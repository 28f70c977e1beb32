"""
Tests for parsing backend replies and coercing them into NutritionEstimate.

Covers:
- numeric coercion and per-field defaulting
- description fallback order
- hard failure on unparseable replies
- optional JSON extraction from surrounding text
"""

import json

import pytest

from services.response_normalizer import (
    UNKNOWN_MEAL,
    coerce_number,
    normalize_reply,
    parse_reply,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (350, 350),
        (12.5, 12.5),
        ("42", 42),
        (" 7.25 ", 7.25),
        ("unknown", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        ([5], 0),
        ({"value": 5}, 0),
        (float("nan"), 0),
        (float("inf"), 0),
        ("Infinity", 0),
        (10**400, 0),
        ("1" + "0" * 400, 0),
    ],
)
def test_coerce_number(value, expected):
    assert coerce_number(value) == expected


def test_valid_numbers_pass_through_unchanged():
    value = coerce_number(350)

    assert value == 350
    assert isinstance(value, int)


def test_complete_reply_is_returned_as_is():
    reply = {
        "calories": 350,
        "protein": 40,
        "carbs": 10,
        "fats": 15,
        "description": "Grilled Chicken Salad",
    }

    estimate = normalize_reply(json.dumps(reply), "grilled chicken salad")

    assert estimate.model_dump() == reply


def test_partial_reply_defaults_each_field_independently():
    estimate = normalize_reply('{"calories":"unknown","protein":5}', "mystery snack")

    assert estimate.model_dump() == {
        "calories": 0,
        "protein": 5,
        "carbs": 0,
        "fats": 0,
        "description": "mystery snack",
    }


def test_null_fields_become_zero():
    estimate = normalize_reply(
        '{"calories": null, "protein": 20, "carbs": null, "fats": "abc", "description": "Bowl"}'
    )

    assert (estimate.calories, estimate.protein, estimate.carbs, estimate.fats) == (0, 20, 0, 0)


def test_description_falls_back_to_query_description():
    estimate = normalize_reply('{"calories": 100, "description": ""}', "apple")

    assert estimate.description == "apple"


def test_description_falls_back_to_unknown_meal():
    estimate = normalize_reply('{"calories": 100}', None)

    assert estimate.description == UNKNOWN_MEAL == "Unknown Meal"


def test_unparseable_reply_is_a_hard_error():
    with pytest.raises(ValueError):
        normalize_reply("not json", "toast")


def test_non_object_reply_is_rejected():
    with pytest.raises(ValueError):
        parse_reply('[{"calories": 100}]')


def test_wrapped_json_fails_without_extraction():
    with pytest.raises(ValueError):
        parse_reply('Here you go: {"calories": 500} Enjoy!')


def test_wrapped_json_is_extracted_when_enabled():
    text = 'Here you go:\n```json\n{"calories": 500, "description": "Burger"}\n```'

    estimate = normalize_reply(text, "burger", allow_extraction=True)

    assert estimate.calories == 500
    assert estimate.description == "Burger"


def test_extraction_without_any_object_still_fails():
    with pytest.raises(ValueError):
        parse_reply("no structured data here", allow_extraction=True)


@pytest.mark.parametrize("value", [{"name": "Pasta"}, ["Pasta"], 42])
def test_non_string_description_uses_fallback(value):
    reply = json.dumps({"calories": 100, "description": value})

    estimate = normalize_reply(reply, "pasta bake")

    assert estimate.description == "pasta bake"
