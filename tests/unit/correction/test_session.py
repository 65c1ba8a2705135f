import pytest

from grammar_corrector.correction.errors import SpanMismatchError, UnknownCorrectionError
from grammar_corrector.correction.session import CorrectionSession
from grammar_corrector.types import HighlightSegment
from tests.test_helpers import assert_session_invariants, create_test_correction, create_test_session


@pytest.fixture
def cat_session():
    text = "The cat sat. The cat ran."
    return create_test_session(
        text,
        [
            create_test_correction(text, 4, 7, "kitten", "c1"),
            create_test_correction(text, 17, 20, "kitten", "c2"),
        ],
    )


def test_apply_replaces_span_and_returns_new_buffer():
    text = "She go to the library."
    session = create_test_session(text, [create_test_correction(text, 4, 6, "goes", "c1")])

    result = session.apply("c1")

    assert result.text == "She goes to the library."
    assert result.remaining == []
    assert result.applied.id == "c1"
    assert session.text == "She goes to the library."
    assert session.corrections == []


def test_apply_shifts_later_spans_by_length_difference(cat_session):
    result = cat_session.apply("c1")

    assert result.text == "The kitten sat. The cat ran."
    assert [(c.id, c.start, c.end) for c in result.remaining] == [("c2", 20, 23)]
    assert_session_invariants(cat_session)

    result = cat_session.apply("c2")
    assert result.text == "The kitten sat. The kitten ran."


def test_apply_leaves_earlier_spans_untouched(cat_session):
    result = cat_session.apply("c2")

    assert result.text == "The cat sat. The kitten ran."
    assert [(c.id, c.start, c.end) for c in result.remaining] == [("c1", 4, 7)]
    assert cat_session.apply("c1").text == "The kitten sat. The kitten ran."


def test_same_length_replacement_leaves_other_spans_unchanged():
    text = "I are sure she go home."
    session = create_test_session(
        text,
        [
            create_test_correction(text, 2, 5, "was", "c1"),
            create_test_correction(text, 15, 17, "goes", "c2"),
        ],
    )

    result = session.apply("c1")

    assert result.text == "I was sure she go home."
    assert [(c.start, c.end) for c in result.remaining] == [(15, 17)]


def test_shorter_replacement_shifts_backwards():
    text = "Their are two dogs here."
    session = create_test_session(
        text,
        [
            create_test_correction(text, 0, 5, "There", "c1"),
            create_test_correction(text, 14, 18, "dog", "c2"),
        ],
    )
    session.apply("c2")
    result = session.apply("c1")
    assert result.text == "There are two dog here."

    text = "Alright, alot of people came."
    session = create_test_session(
        text,
        [
            create_test_correction(text, 0, 7, "All", "c1"),
            create_test_correction(text, 9, 13, "a lot", "c2"),
        ],
    )
    result = session.apply("c1")
    assert [(c.start, c.end) for c in result.remaining] == [(5, 9)]
    assert session.apply("c2").text == "All, a lot of people came."


def test_corrected_text_is_trimmed_before_insertion():
    text = "She go home."
    session = create_test_session(text, [create_test_correction(text, 4, 6, "  goes ", "c1")])
    assert session.apply("c1").text == "She goes home."


def test_adjacent_span_starting_at_edit_end_is_shifted():
    text = "ab cd"
    session = create_test_session(
        text,
        [
            create_test_correction(text, 0, 2, "xyz", "c1"),
            create_test_correction(text, 2, 5, " CD", "c2"),
        ],
    )
    result = session.apply("c1")
    assert [(c.start, c.end) for c in result.remaining] == [(3, 6)]
    assert_session_invariants(session)


def test_unknown_correction_raises():
    session = CorrectionSession("Some text.")
    with pytest.raises(UnknownCorrectionError):
        session.apply("missing")
    with pytest.raises(KeyError):
        session.apply("missing")


def test_applying_twice_raises(cat_session):
    cat_session.apply("c1")
    with pytest.raises(UnknownCorrectionError):
        cat_session.apply("c1")


def test_span_mismatch_fails_loudly_and_leaves_buffer_alone(cat_session):
    cat_session._pending["c2"].start += 1
    cat_session._pending["c2"].end += 1

    with pytest.raises(SpanMismatchError) as exc_info:
        cat_session.apply("c2")

    assert exc_info.value.expected == "cat"
    assert cat_session.text == "The cat sat. The cat ran."


def test_complete_check_rejects_overlapping_corrections():
    text = "the cat sat"
    session = CorrectionSession(text)
    ticket = session.begin_check()
    with pytest.raises(ValueError):
        session.complete_check(
            ticket,
            [
                create_test_correction(text, 0, 7, "a cat", "c1"),
                create_test_correction(text, 4, 7, "kitten", "c2"),
            ],
        )
    assert session.corrections == []


def test_complete_check_rejects_tokens_not_in_buffer():
    session = CorrectionSession("She go home.")
    ticket = session.begin_check()
    correction = create_test_correction("She go home.", 4, 6, "goes", "c1")
    correction.token = "went"
    with pytest.raises(SpanMismatchError):
        session.complete_check(ticket, [correction])


def test_new_text_discards_pending_corrections(cat_session):
    ticket = cat_session.begin_check("A brand new letter.")
    assert cat_session.text == "A brand new letter."
    assert cat_session.corrections == []
    assert ticket.text == "A brand new letter."


def test_begin_check_with_same_text_keeps_corrections(cat_session):
    cat_session.begin_check("The cat sat. The cat ran.")
    assert len(cat_session.corrections) == 2


def test_stale_ticket_is_discarded():
    session = CorrectionSession()
    first = session.begin_check("She go home.")
    second = session.begin_check("He go home.")
    assert second.request_id == first.request_id + 1

    stale = [create_test_correction("She go home.", 4, 6, "goes", "old")]
    assert session.complete_check(first, stale) is False
    assert session.corrections == []

    fresh = [create_test_correction("He go home.", 3, 5, "goes", "new")]
    assert session.complete_check(second, fresh) is True
    assert [c.id for c in session.corrections] == ["new"]


def test_ticket_is_stale_after_buffer_changes(cat_session):
    ticket = cat_session.begin_check()
    assert cat_session.is_current(ticket)

    cat_session.apply("c1")

    assert not cat_session.is_current(ticket)
    assert cat_session.complete_check(ticket, []) is False
    assert [c.id for c in cat_session.corrections] == ["c2"]


def test_new_check_replaces_whole_set(cat_session):
    text = cat_session.text
    ticket = cat_session.begin_check()
    assert cat_session.complete_check(ticket, [create_test_correction(text, 8, 11, "sits", "c3")])
    assert [c.id for c in cat_session.corrections] == ["c3"]


def test_corrections_are_copies(cat_session):
    corrections = cat_session.corrections
    corrections[0].start = 100
    assert cat_session.get("c1").start == 4


def test_dismiss_removes_without_editing(cat_session):
    dismissed = cat_session.dismiss("c1")
    assert dismissed.id == "c1"
    assert cat_session.text == "The cat sat. The cat ran."
    assert [c.id for c in cat_session.corrections] == ["c2"]
    with pytest.raises(UnknownCorrectionError):
        cat_session.dismiss("c1")


def test_highlight_segments_cover_whole_buffer(cat_session):
    segments = cat_session.highlight_segments()
    assert segments == [
        HighlightSegment(text="The "),
        HighlightSegment(text="cat", correction_id="c1"),
        HighlightSegment(text=" sat. The "),
        HighlightSegment(text="cat", correction_id="c2"),
        HighlightSegment(text=" ran."),
    ]
    assert "".join(s.text for s in segments) == cat_session.text


def test_highlight_segments_without_corrections():
    assert CorrectionSession("Plain.").highlight_segments() == [HighlightSegment(text="Plain.")]
    assert CorrectionSession("").highlight_segments() == []


def test_to_dict(cat_session):
    data = cat_session.to_dict()
    assert data["text"] == "The cat sat. The cat ran."
    assert data["corrections"][0] == {
        "id": "c1",
        "start": 4,
        "end": 7,
        "original": "cat",
        "corrected": "kitten",
        "issue": "Test issue",
    }
