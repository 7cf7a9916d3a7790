"""
AI assistant endpoints: ask a question, extract a question from a voice
transcript, summarize a class.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..dependencies import get_assistant_service
from ..exceptions import LLMServiceError, ValidationError
from ..services.assistant_service import AssistantService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assistant"])


class AskRequest(BaseModel):
    question: Optional[str] = None


class ExtractQuestionRequest(BaseModel):
    transcript: Optional[str] = None


class SummaryRequest(BaseModel):
    topic: Optional[str] = None
    studentQuestions: Optional[List[str]] = None


@router.post("/ask-ai")
async def ask_ai(
    request_data: AskRequest,
    assistant: AssistantService = Depends(get_assistant_service),
):
    try:
        answer = await assistant.ask(request_data.question)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LLMServiceError as e:
        logger.error(f"❌ GROQ ERROR: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="AI response failed"
        )
    return {"answer": answer}


@router.post("/extract-question")
async def extract_question(
    request_data: ExtractQuestionRequest,
    assistant: AssistantService = Depends(get_assistant_service),
):
    """🎤 Extract the core question from a voice transcript ("<NONE>" if there is none)"""
    try:
        extracted = await assistant.extract_question(request_data.transcript)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LLMServiceError as e:
        logger.error(f"❌ EXTRACTION ERROR: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Question extraction failed"
        )
    return {"extractedQuestion": extracted}


@router.post("/generate-summary")
async def generate_summary(
    request_data: SummaryRequest,
    assistant: AssistantService = Depends(get_assistant_service),
):
    try:
        summary = await assistant.summarize(request_data.topic, request_data.studentQuestions)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LLMServiceError as e:
        logger.error(f"❌ SUMMARY GENERATION ERROR: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Summary generation failed"
        )
    return {"summary": summary}
