"""LLM-backed text interpretation.

Quick start:
    from gitassist.services.interpreter import description_refiner

    text = await description_refiner.refine("app crash when i click save", "issue")
"""

from .base import BaseInterpreter, RefinementError
from .refiner import DescriptionRefiner, description_refiner
from .types import REFINE_CONTEXTS, RefinedText, RefineInput

__all__ = [
    "BaseInterpreter",
    "RefinementError",
    "DescriptionRefiner",
    "description_refiner",
    "RefineInput",
    "RefinedText",
    "REFINE_CONTEXTS",
]
