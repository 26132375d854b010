"""Input/output types for text refinement."""

from dataclasses import dataclass
from typing import Literal

RefineContext = Literal["issue", "release notes"]

REFINE_CONTEXTS: tuple[str, ...] = ("issue", "release notes")


@dataclass
class RefineInput:
    """User-written text plus what it will be used for."""

    text: str
    context: RefineContext


@dataclass
class RefinedText:
    """Output from refinement."""

    refined_text: str
    raw_response: str | None = None  # Full LLM response for debugging
