from typing import Any, List, Optional
from pydantic import BaseModel


class Question(BaseModel):
    """A multiple choice question with its answer key"""
    question: str
    options: List[str]  # exactly 4, labeled A-D by position
    correctAnswer: int  # index 0-3

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "question": "Which gas do plants absorb during photosynthesis?",
                "options": ["Oxygen", "Carbon dioxide", "Nitrogen", "Helium"],
                "correctAnswer": 1
            }
        }


class PublicQuestion(BaseModel):
    """Student-facing view of a question (no answer key)"""
    id: int
    question: str
    options: List[str]


class Submission(BaseModel):
    studentName: str
    answers: List[Any]  # raw values as sent; anything but an int index is wrong
    score: int  # percentage 0-100
    correctCount: int
    totalQuestions: int
    submittedAt: str


class Quiz(BaseModel):
    id: str
    roomName: str
    topic: str
    questions: List[Question]
    submissions: List[Submission] = []
    createdAt: str

    def public_questions(self) -> List[PublicQuestion]:
        return [
            PublicQuestion(id=idx, question=q.question, options=list(q.options))
            for idx, q in enumerate(self.questions)
        ]


class QuestionResult(BaseModel):
    questionId: int
    question: str
    studentAnswer: Any = None
    correctAnswer: int
    isCorrect: bool


class SubmissionResult(BaseModel):
    score: int
    correctCount: int
    totalQuestions: int
    results: List[QuestionResult]


class QuizStats(BaseModel):
    totalSubmissions: int
    averageScore: int
    highestScore: int
    lowestScore: int


class QuizResultsView(BaseModel):
    quizId: str
    topic: str
    roomName: str
    createdAt: str
    questions: List[Question]  # includes answer keys (teacher view)
    submissions: List[Submission]
    stats: QuizStats
