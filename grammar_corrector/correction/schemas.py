from __future__ import annotations

from typing import Any
from pydantic import BaseModel, ConfigDict, Field


class RawErrorRecord(BaseModel):
    """One error object as the model returned it, before any trust is placed in it."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    original: str = Field("", description="The incorrect word as reported by the model")
    corrected: str = Field("", description="The suggested replacement word")
    # Models sometimes send a number or an object here; coerced to text downstream
    issue: Any = Field(None, description="Brief description of the error")
    # The model is told to send placeholder zeros; these are never used downstream
    start: Any = Field(None, description="Untrusted character offset, ignored")
    end: Any = Field(None, description="Untrusted character offset, ignored")
