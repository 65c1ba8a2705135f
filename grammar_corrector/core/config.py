import os
from dataclasses import dataclass, field
from typing import Optional

from grammar_corrector.correction.boundary import BoundaryPolicy

CONTENT_TYPES = ("letter", "story", "review")


@dataclass
class ReviewConfig:
    """Describes the piece of writing being proofread, used to give the model context."""

    content_type: str = "letter"
    recipient: Optional[str] = None
    occasion: Optional[str] = None
    book_title: Optional[str] = None
    review_type: Optional[str] = None
    user_id: str = "default-user"

    def __post_init__(self):
        if self.content_type not in CONTENT_TYPES:
            raise ValueError(f"content_type must be one of {', '.join(CONTENT_TYPES)}, got '{self.content_type}'")


@dataclass
class CheckerConfig:
    """Configuration for the grammar checking pipeline."""

    cache_dir: Optional[str] = field(default_factory=lambda: os.getenv("GRAMMAR_CORRECTOR_CACHE_DIR"))
    boundary_policy: BoundaryPolicy = field(default_factory=BoundaryPolicy)
