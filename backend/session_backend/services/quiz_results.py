"""
Results Aggregator
Teacher-facing view of a quiz: questions with answer keys, every submission
and summary statistics. Computed fresh on every call.
"""
from typing import Sequence

from ..models.quiz import QuizResultsView, QuizStats, Submission
from ..utils.scoring import rounded_mean
from .quiz_store import QuizStore


def compute_stats(submissions: Sequence[Submission]) -> QuizStats:
    scores = [s.score for s in submissions]
    return QuizStats(
        totalSubmissions=len(submissions),
        averageScore=rounded_mean(scores),
        highestScore=max(scores) if scores else 0,
        lowestScore=min(scores) if scores else 0,
    )


class QuizResults:
    def __init__(self, store: QuizStore):
        self.store = store

    async def get_results(self, quiz_id: str) -> QuizResultsView:
        """Raises QuizNotFoundError for an unknown quiz id."""
        quiz = await self.store.get(quiz_id)
        return QuizResultsView(
            quizId=quiz.id,
            topic=quiz.topic,
            roomName=quiz.roomName,
            createdAt=quiz.createdAt,
            questions=quiz.questions,
            submissions=quiz.submissions,
            stats=compute_stats(quiz.submissions),
        )
