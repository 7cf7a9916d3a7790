"""
Submission Grader
Grades one student's answers against a stored quiz and records the attempt.
"""
import logging
from typing import Any, List, Optional, Sequence

from ..exceptions import ValidationError
from ..models.quiz import Question, QuestionResult, Submission, SubmissionResult
from ..utils.scoring import percentage, utc_timestamp
from .quiz_store import QuizStore

logger = logging.getLogger(__name__)


def is_answer_index(value: Any) -> bool:
    # bool is a subclass of int; true/false is not an option index
    return isinstance(value, int) and not isinstance(value, bool)


def grade_answers(questions: Sequence[Question], answers: Sequence[Any]) -> SubmissionResult:
    """
    Compare answers to the key, index by index.

    Answers are compared strictly: only an int equal to the key is correct.
    Missing, null, out-of-range, bool, float or string answers count as
    incorrect and are echoed back unchanged. Extra answers beyond the last
    question are ignored.
    """
    correct_count = 0
    results: List[QuestionResult] = []

    for idx, q in enumerate(questions):
        student_answer = answers[idx] if idx < len(answers) else None
        is_correct = is_answer_index(student_answer) and student_answer == q.correctAnswer
        if is_correct:
            correct_count += 1

        results.append(QuestionResult(
            questionId=idx,
            question=q.question,
            studentAnswer=student_answer,
            correctAnswer=q.correctAnswer,
            isCorrect=is_correct,
        ))

    total = len(questions)
    return SubmissionResult(
        score=percentage(correct_count, total),
        correctCount=correct_count,
        totalQuestions=total,
        results=results,
    )


class QuizGrader:
    def __init__(self, store: QuizStore):
        self.store = store

    async def submit(
        self,
        quiz_id: str,
        student_name: str,
        answers: Optional[Sequence[Any]],
    ) -> SubmissionResult:
        """
        Grade and record a submission. Students may submit more than once;
        every attempt is kept.

        Raises:
            ValidationError: quiz_id, student_name or answers missing
            QuizNotFoundError: unknown quiz id
        """
        if not quiz_id or not student_name or answers is None:
            raise ValidationError("quizId, studentName, and answers are required")

        quiz = await self.store.get(quiz_id)
        result = grade_answers(quiz.questions, answers)

        submission = Submission(
            studentName=student_name,
            answers=list(answers),
            score=result.score,
            correctCount=result.correctCount,
            totalQuestions=result.totalQuestions,
            submittedAt=utc_timestamp(),
        )
        await self.store.append_submission(quiz_id, submission)

        logger.info(f"✅ Quiz submitted by {student_name}: {result.score}%")
        return result
