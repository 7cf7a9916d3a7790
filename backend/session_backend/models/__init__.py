from .quiz import (
    PublicQuestion,
    Question,
    QuestionResult,
    Quiz,
    QuizResultsView,
    QuizStats,
    Submission,
    SubmissionResult,
)

__all__ = [
    "PublicQuestion",
    "Question",
    "QuestionResult",
    "Quiz",
    "QuizResultsView",
    "QuizStats",
    "Submission",
    "SubmissionResult",
]
