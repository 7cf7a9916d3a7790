import logging
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..dependencies import get_quiz_generator, get_quiz_grader, get_quiz_results
from ..exceptions import GenerationError, QuizNotFoundError, ValidationError
from ..models.quiz import PublicQuestion, QuizResultsView, SubmissionResult
from ..services.quiz_generator import QuizGenerator
from ..services.quiz_grader import QuizGrader
from ..services.quiz_results import QuizResults

logger = logging.getLogger(__name__)

router = APIRouter(tags=["quiz"])


class GenerateQuizRequest(BaseModel):
    topic: Optional[str] = None
    studentQuestions: Optional[List[str]] = None
    roomName: Optional[str] = None


class GenerateQuizResponse(BaseModel):
    quizId: str
    questions: List[PublicQuestion]  # no answer keys


class SubmitQuizRequest(BaseModel):
    quizId: Optional[str] = None
    studentName: Optional[str] = None
    answers: Optional[List[Any]] = None  # not coerced; graded as sent

    class Config:
        json_schema_extra = {
            "example": {
                "quizId": "quiz_1732528800000_k3j9x0a1b",
                "studentName": "Alice",
                "answers": [0, 1, 2, 3, 0]
            }
        }


@router.post("/generate-quiz", response_model=GenerateQuizResponse)
async def generate_quiz(
    request_data: GenerateQuizRequest,
    generator: QuizGenerator = Depends(get_quiz_generator),
):
    """Generate a quiz from the session topic and student questions (teacher)"""
    try:
        quiz = await generator.generate(
            request_data.topic,
            request_data.studentQuestions,
            request_data.roomName,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except GenerationError as e:
        if e.kind == GenerationError.INVALID_FORMAT:
            detail = "Failed to parse quiz questions or AI returned invalid format"
        else:
            detail = "Quiz generation failed"
        logger.error(f"❌ QUIZ GENERATION ERROR: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

    return GenerateQuizResponse(quizId=quiz.id, questions=quiz.public_questions())


@router.post("/submit-quiz", response_model=SubmissionResult)
async def submit_quiz(
    request_data: SubmitQuizRequest,
    grader: QuizGrader = Depends(get_quiz_grader),
):
    """Grade a student's answers; the response includes the correct answers for review"""
    try:
        return await grader.submit(
            request_data.quizId,
            request_data.studentName,
            request_data.answers,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except QuizNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")


@router.get("/quiz-results/{quiz_id}", response_model=QuizResultsView)
async def get_quiz_results(
    quiz_id: str,
    results: QuizResults = Depends(get_quiz_results),
):
    """Questions with answer keys, all submissions and score statistics (teacher)"""
    try:
        return await results.get_results(quiz_id)
    except QuizNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
