"""Tests for the substitution transform stages."""

import logging

import pytest
from helpers import make_substitution

from untis_export.engine.transforms import remove_exams, replace_substitution_types


class TestReplaceSubstitutionTypes:
    """Tests for replace_substitution_types."""

    def test_replaces_substring(self) -> None:
        """Test a rule replaces all occurrences within the label."""
        substitutions = [make_substitution(1, "Vertretung / Vertretung")]

        replace_substitution_types(substitutions, {"Vertretung": "Substitution"})

        assert substitutions[0].type == "Substitution / Substitution"

    def test_rules_chain_in_declared_order(self) -> None:
        """Test later rules see the result of earlier rules."""
        substitutions = [make_substitution(1, "A")]

        replace_substitution_types(substitutions, {"A": "B", "B": "C"})

        assert substitutions[0].type == "C"

    def test_reverse_order_does_not_chain(self) -> None:
        """Test rules are not re-applied once processed."""
        substitutions = [make_substitution(1, "A")]

        replace_substitution_types(substitutions, {"B": "C", "A": "B"})

        assert substitutions[0].type == "B"

    def test_idempotent_for_non_overlapping_mapping(self) -> None:
        """Test applying a non-overlapping mapping twice equals applying it once."""
        mapping = {"Entfall": "Cancelled", "Raum": "Room"}
        once = [make_substitution(1, "Entfall"), make_substitution(2, "Raum-Vtr.")]
        twice = [s.model_copy() for s in once]

        replace_substitution_types(once, mapping)
        replace_substitution_types(twice, mapping)
        replace_substitution_types(twice, mapping)

        assert [s.type for s in once] == [s.type for s in twice] == ["Cancelled", "Room-Vtr."]

    @pytest.mark.parametrize("mapping", [None, {}])
    def test_empty_mapping_is_noop(self, mapping: dict[str, str] | None) -> None:
        """Test a missing or empty mapping leaves records untouched."""
        substitutions = [make_substitution(1, "X"), make_substitution(2, "Y")]
        before = [s.model_copy() for s in substitutions]

        result = replace_substitution_types(substitutions, mapping)

        assert result is substitutions
        assert substitutions == before

    def test_empty_key_raises(self) -> None:
        """Test an empty search string fails instead of corrupting labels."""
        substitutions = [make_substitution(1, "Entfall")]

        with pytest.raises(ValueError, match="must not be empty"):
            replace_substitution_types(substitutions, {"": "X"})

        assert substitutions[0].type == "Entfall"

    def test_missing_type_is_skipped(self) -> None:
        """Test records without a type label are left alone."""
        substitutions = [make_substitution(1, None), make_substitution(2, "X")]

        replace_substitution_types(substitutions, {"X": "Y"})

        assert substitutions[0].type is None
        assert substitutions[1].type == "Y"

    def test_does_not_add_or_remove_records(self) -> None:
        """Test the number and order of records is unchanged."""
        substitutions = [make_substitution(i, "X") for i in range(5)]

        replace_substitution_types(substitutions, {"X": ""})

        assert [s.id for s in substitutions] == [0, 1, 2, 3, 4]
        assert all(s.type == "" for s in substitutions)


class TestRemoveExams:
    """Tests for remove_exams."""

    def test_removes_exam_rows_keeping_order(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test ids [0, 5, 0, 7] become [5, 7] and two removals are logged."""
        substitutions = [make_substitution(i) for i in (0, 5, 0, 7)]

        with caplog.at_level(logging.DEBUG, logger="untis_export.engine.transforms"):
            result = remove_exams(substitutions, True)

        assert result is substitutions
        assert [s.id for s in substitutions] == [5, 7]
        assert "Removed 2 exams." in caplog.text

    def test_disabled_is_strict_noop(self) -> None:
        """Test the list is untouched when the flag is off."""
        substitutions = [make_substitution(i) for i in (0, 5, 0, 7)]
        originals = list(substitutions)

        result = remove_exams(substitutions, False)

        assert result is substitutions
        assert all(a is b for a, b in zip(substitutions, originals, strict=True))

    def test_keeps_remaining_objects(self) -> None:
        """Test surviving records are the same objects as before."""
        keep = make_substitution(3)
        substitutions = [make_substitution(0), keep, make_substitution(0)]

        remove_exams(substitutions, True)

        assert substitutions == [keep]
        assert substitutions[0] is keep

    def test_consecutive_exams(self) -> None:
        """Test adjacent exam rows at both ends are all removed."""
        substitutions = [make_substitution(i) for i in (0, 0, 1, 2, 0, 0)]

        remove_exams(substitutions, True)

        assert [s.id for s in substitutions] == [1, 2]

    def test_only_exams(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a list of only exams becomes empty."""
        substitutions = [make_substitution(0) for _ in range(3)]

        with caplog.at_level(logging.DEBUG, logger="untis_export.engine.transforms"):
            remove_exams(substitutions, True)

        assert substitutions == []
        assert "Removed 3 exams." in caplog.text

    def test_empty_list(self) -> None:
        """Test an empty list stays empty."""
        substitutions: list = []

        remove_exams(substitutions, True)

        assert substitutions == []
