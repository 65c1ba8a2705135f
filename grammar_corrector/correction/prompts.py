from typing import Any, Dict, Optional

from grammar_corrector.core.config import ReviewConfig

RESPONSE_FORMAT_EXAMPLE = """[
  {
    "start": 0,
    "end": 0,
    "original": "are",
    "corrected": "am",
    "issue": "Subject-verb agreement error"
  },
  {
    "start": 0,
    "end": 0,
    "original": "go",
    "corrected": "goes",
    "issue": "Subject-verb agreement error"
  },
  {
    "start": 0,
    "end": 0,
    "original": "tresure",
    "corrected": "treasure",
    "issue": "Spelling error"
  }
]"""


def _context_info(review: ReviewConfig) -> str:
    if review.content_type == "letter":
        return f"Letter to: {review.recipient or 'Recipient'}\nOccasion: {review.occasion or 'General'}"
    if review.content_type == "story":
        return "This is a creative story."
    return f"Book Review Type: {review.review_type or 'General'}\nBook Title: {review.book_title or 'Unknown'}"


def build_grammar_prompt(text: str, review: Optional[ReviewConfig] = None) -> str:
    """Format the grammar review prompt.

    The model is asked to name only the offending word and its correction. Offsets
    are requested as placeholder zeros; positions are recovered by searching the text.
    """
    review = review or ReviewConfig()
    content_type = review.content_type

    return (
        f"You are an English grammar checker. Review the following {content_type} and identify ALL grammar, "
        "spelling, and punctuation errors.\n\n"
        f"{_context_info(review)}\n\n"
        f"{content_type.capitalize()} content:\n"
        f"{text}\n\n"
        "IMPORTANT: You must return a JSON array of errors in the following exact format:\n"
        "[\n"
        "  {\n"
        '    "start": <character_index_start>,\n'
        '    "end": <character_index_end>,\n'
        '    "original": "<the_incorrect_text>",\n'
        '    "corrected": "<the_corrected_text>",\n'
        '    "issue": "<brief_description_of_the_error>"\n'
        "  }\n"
        "]\n\n"
        "Rules:\n"
        "1. Only include actual errors (grammar, spelling, punctuation)\n"
        "2. Identify the PROBLEM WORD only, NOT the position.\n"
        '   - If "She go to the library" has an error, original should be "go" and corrected should be "goes"\n'
        '   - If "tresure" is misspelled, original should be "tresure" and corrected should be "treasure"\n'
        "3. original MUST be ONLY the incorrect word, NO spaces, NO punctuation, NO surrounding words\n"
        "4. corrected MUST be ONLY the corrected word, NO spaces, NO punctuation\n"
        '5. issue is a brief explanation (e.g., "Subject-verb agreement", "Missing comma", "Spelling error")\n'
        "6. start and end can be set to 0 (they will be recalculated automatically)\n"
        "7. If there are no errors, return an empty array: []\n"
        "8. Return ONLY the JSON array, no other text before or after\n\n"
        "Example format:\n"
        f"{RESPONSE_FORMAT_EXAMPLE}"
    )


def build_inputs(text: str, review: Optional[ReviewConfig] = None) -> Dict[str, Any]:
    """Structured inputs sent alongside the prompt to apps that accept them (Dify)."""
    review = review or ReviewConfig()
    return {
        "content_type": review.content_type,
        "recipient": review.recipient or "",
        "occasion": review.occasion or "",
        "bookTitle": review.book_title or "",
        "reviewType": review.review_type or "",
        "content": text,
    }
