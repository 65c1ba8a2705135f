from grammar_corrector.correction.deduplicator import deduplicate_records
from grammar_corrector.types import ErrorRecord


def test_collapses_case_insensitive_duplicates_keeping_first():
    records = [
        ErrorRecord(original="Go", corrected="goes", issue="first"),
        ErrorRecord(original="go", corrected="goes", issue="second"),
        ErrorRecord(original="go", corrected="GOES", issue="third"),
    ]
    unique = deduplicate_records(records)
    assert len(unique) == 1
    assert unique[0].issue == "first"
    assert unique[0].original == "Go"


def test_different_corrections_are_kept():
    records = [
        ErrorRecord(original="go", corrected="goes"),
        ErrorRecord(original="go", corrected="went"),
    ]
    assert len(deduplicate_records(records)) == 2


def test_preserves_first_seen_order():
    records = [
        ErrorRecord(original="b", corrected="B"),
        ErrorRecord(original="a", corrected="A"),
        ErrorRecord(original="B", corrected="b"),
        ErrorRecord(original="c", corrected="C"),
    ]
    assert [r.original for r in deduplicate_records(records)] == ["b", "a", "c"]


def test_separator_prevents_key_collisions():
    records = [
        ErrorRecord(original="ab", corrected="c"),
        ErrorRecord(original="a", corrected="bc"),
    ]
    assert len(deduplicate_records(records)) == 2


def test_empty_input():
    assert deduplicate_records([]) == []
