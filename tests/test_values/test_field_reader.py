"""Tests for FieldReader's lenient and strict fallback policies."""

import pytest

from blockregen.config.section import ConfigSection
from blockregen.errors import ParseError
from blockregen.model.diagnostic import DiagnosticLog
from blockregen.values.fields import FieldReader, join_path
from blockregen.values.number import Fixed, Range


@pytest.fixture
def diagnostics() -> DiagnosticLog:
    return DiagnosticLog()


class TestLenient:
    def test_valid_value(self, diagnostics):
        reader = FieldReader("stone", diagnostics)
        assert reader.number(ConfigSection({"regen-delay": "5-10"}), "regen-delay", Fixed(3)) == Range(5, 10)
        assert len(diagnostics) == 0

    def test_missing_value_uses_default_silently(self, diagnostics):
        reader = FieldReader("stone", diagnostics)
        assert reader.number(ConfigSection({}), "regen-delay", Fixed(3)) == Fixed(3)
        assert len(diagnostics) == 0

    def test_invalid_value_warns_and_uses_default(self, diagnostics):
        reader = FieldReader("stone", diagnostics)
        value = reader.number(ConfigSection({"chance": "abc"}), "chance", Fixed(100), "rewards.drop-item")
        assert value == Fixed(100)
        [warning] = diagnostics.warnings
        assert warning.preset == "stone"
        assert warning.path == "rewards.drop-item.chance"
        assert "using default 100" in warning.message


class TestStrict:
    def test_missing_value_uses_default(self, diagnostics):
        reader = FieldReader("stone", diagnostics, strict=True)
        assert reader.number(ConfigSection({}), "regen-delay", Fixed(3)) == Fixed(3)

    def test_invalid_value_raises(self, diagnostics):
        reader = FieldReader("stone", diagnostics, strict=True)
        with pytest.raises(ParseError, match="regen-delay"):
            reader.number(ConfigSection({"regen-delay": "10-5"}), "regen-delay", Fixed(3))
        assert len(diagnostics) == 0


class TestJoinPath:
    def test_skips_empty_parts(self):
        assert join_path("", "rewards", "", "money") == "rewards.money"
