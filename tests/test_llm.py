# tests/test_llm.py
import json
import os
from unittest.mock import patch

from car_efficiency.core.types import SpecificationRecord
from car_efficiency.enrichment.llm_insights import fetch_insights, parse_insights_response
from car_efficiency.enrichment.prompts import build_insights_prompt


MOCK_RESPONSE = {
    "normalized": {
        "fuelType": "Diesel",
        "realWorld": {"kmpl": 19.5, "kmkg": None, "kmPerKWh": None},
        "kwPerTonne": "62.3",
        "segment": "compact SUV",
        "missing": ["kerbWeight"],
    },
    "insights": [
        {"title": "Running cost", "detail": "Diesel suits high annual mileage."},
        {"title": "Safety", "detail": "Six airbags are standard."},
    ],
}


class MockChoice:
    def __init__(self, content):
        self.message = type("m", (), {"content": content})


class MockCompletion:
    def __init__(self, content):
        self.choices = [MockChoice(content)]


def mock_create(*args, **kwargs):
    return MockCompletion("```json\n" + json.dumps(MOCK_RESPONSE) + "\n```")


def mock_create_garbage(*args, **kwargs):
    return MockCompletion("Sorry, I cannot help with that.")


def mock_create_error(*args, **kwargs):
    raise RuntimeError("rate limited")


@patch.dict(os.environ, {"OPENAI_API_KEY": "dummy"})
@patch("openai.resources.chat.completions.Completions.create", new=mock_create)
def test_fetch_insights_parses_overlay():
    result = fetch_insights(SpecificationRecord(name="Brezza"), "page text")

    assert result.fuel_type == "diesel"
    assert result.kmpl == 19.5
    assert result.kmkg is None
    assert result.kw_per_tonne == 62.3
    assert result.segment == "compact SUV"
    assert result.missing == ["kerbWeight"]
    assert [i.title for i in result.insights] == ["Running cost", "Safety"]


@patch.dict(os.environ, {"OPENAI_API_KEY": "dummy"})
@patch("openai.resources.chat.completions.Completions.create", new=mock_create_garbage)
def test_fetch_insights_invalid_reply_falls_back():
    result = fetch_insights(SpecificationRecord(), "page text")

    assert result.missing == ["AI analysis failed"]
    assert result.insights[0].title == "AI Analysis Unavailable"


@patch.dict(os.environ, {"OPENAI_API_KEY": "dummy"})
@patch("openai.resources.chat.completions.Completions.create", new=mock_create_error)
def test_fetch_insights_api_error_falls_back():
    result = fetch_insights(SpecificationRecord(), "page text")

    assert result.insights[0].title == "AI Analysis Unavailable"
    assert "rate limited" in result.insights[0].detail


def test_fetch_insights_without_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    result = fetch_insights(SpecificationRecord(), "page text")

    assert result.missing == ["API key not configured"]
    assert result.insights[0].title == "API Configuration Required"
    assert result.fuel_type is None


def test_parse_insights_response_requires_structure():
    assert parse_insights_response(None) is None
    assert parse_insights_response("no json here") is None
    assert parse_insights_response('{"normalized": {}}') is None
    assert parse_insights_response("{broken json") is None


def test_parse_insights_response_with_surrounding_text():
    text = "Here you go: " + json.dumps({"normalized": {"fuelType": None}, "insights": []}) + " Thanks!"
    parsed = parse_insights_response(text)

    assert parsed is not None
    assert parsed.fuel_type is None
    assert parsed.insights == []


def test_prompt_contains_spec_and_truncated_text():
    prompt = build_insights_prompt({"fuelType": "petrol", "mileage": 20}, "x" * 9000)

    assert '"fuelType": "petrol"' in prompt
    assert "x" * 8000 + "..." in prompt
    assert "x" * 8001 not in prompt
    assert prompt.startswith("You are assisting")


def test_parse_insights_response_drops_non_positive_figures():
    text = json.dumps(
        {
            "normalized": {
                "fuelType": "electric",
                "realWorld": {"kmpl": -12, "kmkg": 0, "kmPerKWh": "-6.5"},
                "kwPerTonne": "1" + "0" * 400,
            },
            "insights": [],
        }
    )
    parsed = parse_insights_response(text)

    assert parsed.kmpl is None
    assert parsed.kmkg is None
    assert parsed.km_per_kwh is None
    assert parsed.kw_per_tonne is None
