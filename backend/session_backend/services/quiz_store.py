"""
Quiz Store
In-memory storage for generated quizzes and their submissions.

Quizzes live for the lifetime of the process; nothing is written to disk.
Inserts are serialized by a store-wide lock and submissions by a lock per quiz,
so appends to one quiz never block another.
"""
import asyncio
import logging
import random
import string
import time
from typing import Dict, List

from ..exceptions import DuplicateQuizError, QuizNotFoundError
from ..models.quiz import Question, Quiz, Submission
from ..utils.scoring import utc_timestamp

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_quiz_id() -> str:
    """quiz_<epoch ms>_<9 random base36 chars>"""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"quiz_{int(time.time() * 1000)}_{suffix}"


class QuizStore:
    """
    Process-wide quiz storage.

    Structure: {quizId: Quiz}
    Reads return deep copies so callers never observe a quiz mid-append.
    """

    def __init__(self):
        self._quizzes: Dict[str, Quiz] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._quizzes)

    def __contains__(self, quiz_id: str) -> bool:
        return quiz_id in self._quizzes

    def _insert(self, quiz: Quiz) -> None:
        if quiz.id in self._quizzes:
            raise DuplicateQuizError(quiz.id)
        self._quizzes[quiz.id] = quiz
        self._locks[quiz.id] = asyncio.Lock()

    def _lock_for(self, quiz_id: str) -> asyncio.Lock:
        lock = self._locks.get(quiz_id)
        if lock is None:
            raise QuizNotFoundError(quiz_id)
        return lock

    async def put(self, quiz: Quiz) -> None:
        """Insert a quiz under its id. Raises DuplicateQuizError if the id is taken."""
        async with self._lock:
            self._insert(quiz.model_copy(deep=True))

    async def create(self, room_name: str, topic: str, questions: List[Question]) -> Quiz:
        """
        Assign a fresh id and insert a new quiz in one step.

        Returns a snapshot of the stored quiz.
        """
        async with self._lock:
            quiz_id = generate_quiz_id()
            while quiz_id in self._quizzes:
                quiz_id = generate_quiz_id()

            quiz = Quiz(
                id=quiz_id,
                roomName=room_name,
                topic=topic,
                questions=list(questions),
                submissions=[],
                createdAt=utc_timestamp(),
            )
            self._insert(quiz)

        logger.debug(f"Quiz stored: {quiz_id} ({len(questions)} questions)")
        return quiz.model_copy(deep=True)

    async def get(self, quiz_id: str) -> Quiz:
        """Return a consistent snapshot of the quiz. Raises QuizNotFoundError."""
        async with self._lock_for(quiz_id):
            return self._quizzes[quiz_id].model_copy(deep=True)

    async def append_submission(self, quiz_id: str, submission: Submission) -> int:
        """
        Append a submission to the quiz.

        Returns:
            Number of submissions on the quiz after the append
        """
        async with self._lock_for(quiz_id):
            submissions = self._quizzes[quiz_id].submissions
            submissions.append(submission.model_copy(deep=True))
            return len(submissions)
