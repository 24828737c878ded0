"""Tests for SchemaMockGenerator and field classification."""

import random
from enum import Enum
from typing import Literal

from pydantic import BaseModel

from stepscore.pipeline.domain.mock import FieldKind, SchemaMockGenerator, classify


class Verdict(Enum):
    YES = "yes"
    NO = "no"


class Claim(BaseModel):
    text: str
    supported: bool


class Analysis(BaseModel):
    summary: str
    confidence: float
    count: int
    relevant: bool
    topics: list[str]
    claims: list[Claim]
    ratings: list[int]
    label: Literal["good", "bad"]
    verdict: Verdict
    note: str | None
    extra: dict[str, str]
    primary: Claim


def _generator(seed: int = 7) -> SchemaMockGenerator:
    return SchemaMockGenerator(rng=random.Random(seed))


class TestClassify:
    """classify() maps annotations onto field kinds."""

    def test_primitive_kinds(self) -> None:
        assert classify(str) is FieldKind.STRING
        assert classify(int) is FieldKind.NUMBER
        assert classify(float) is FieldKind.NUMBER
        assert classify(bool) is FieldKind.BOOLEAN

    def test_containers_are_arrays(self) -> None:
        assert classify(list[str]) is FieldKind.ARRAY
        assert classify(tuple[int, ...]) is FieldKind.ARRAY
        assert classify(set) is FieldKind.ARRAY

    def test_literal_and_enum_are_enums(self) -> None:
        assert classify(Literal["a", "b"]) is FieldKind.ENUM
        assert classify(Verdict) is FieldKind.ENUM

    def test_optional_classifies_as_inner_type(self) -> None:
        assert classify(str | None) is FieldKind.STRING

    def test_everything_else_is_other(self) -> None:
        assert classify(dict[str, str]) is FieldKind.OTHER
        assert classify(Claim) is FieldKind.OTHER


class TestGenerate:
    """Object schemas yield one value per declared field."""

    def test_every_field_is_present(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert set(value) == set(Analysis.model_fields)

    def test_string_fields_are_named_placeholders(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert value["summary"] == "Mock summary"
        assert value["note"] == "Mock note"

    def test_number_fields_are_in_range(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert 0 <= value["confidence"] < 100
        assert 0 <= value["count"] < 100

    def test_boolean_field_is_bool(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert isinstance(value["relevant"], bool)

    def test_string_arrays_use_item_placeholders(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert value["topics"] == ["Item 1", "Item 2"]

    def test_model_arrays_recurse(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert len(value["claims"]) == 2
        assert value["claims"][0]["text"] == "Mock text"

    def test_number_arrays_hold_numbers(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert len(value["ratings"]) == 2
        assert all(isinstance(rating, int) for rating in value["ratings"])

    def test_enum_fields_pick_declared_values(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert value["label"] in ("good", "bad")
        assert value["verdict"] in ("yes", "no")

    def test_nested_model_recurses(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert value["primary"]["text"] == "Mock text"

    def test_other_fields_get_named_placeholder(self) -> None:
        value = _generator().generate(Analysis, stage="analyze")

        assert value["extra"] == "Mock extra"

    def test_mock_of_model_without_opaque_fields_validates(self) -> None:
        value = _generator().generate(Claim, stage="analyze")

        assert Claim.model_validate(value).text == "Mock text"

    def test_seeded_generators_agree(self) -> None:
        assert _generator(3).generate(Analysis, "a") == _generator(3).generate(Analysis, "a")


class TestNonObjectSchemas:
    """Anything that is not an object schema gets a stage placeholder."""

    def test_none_schema(self) -> None:
        assert _generator().generate(None, stage="generateReason") == (
            "Mock response for generateReason"
        )

    def test_primitive_schema(self) -> None:
        assert _generator().generate(float, stage="generateScore") == (
            "Mock response for generateScore"
        )
