"""
AI text refinement for issue descriptions and release notes.
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from gitassist.api.deps import get_github_token
from gitassist.core.exceptions import UpstreamError, ValidationError
from gitassist.services.interpreter import RefinementError, description_refiner

# Token required so the endpoint isn't an open LLM proxy
router = APIRouter(prefix="/refine", tags=["refine"], dependencies=[Depends(get_github_token)])
logger = logging.getLogger(__name__)


class RefineRequest(BaseModel):
    text: str = Field(min_length=1)
    context: Literal["issue", "release notes"]


class RefineResponse(BaseModel):
    refined_text: str


@router.post("", response_model=RefineResponse)
async def refine_text(data: RefineRequest) -> RefineResponse:
    try:
        refined = await description_refiner.refine(data.text, data.context)
    except ValueError as e:
        raise ValidationError(str(e)) from None
    except RefinementError as e:
        raise UpstreamError(e.message) from None
    return RefineResponse(refined_text=refined)
