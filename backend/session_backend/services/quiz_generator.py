"""
Quiz Generator
Turns a session topic (and the questions students asked) into a stored quiz.

The language model is asked for a bare JSON array; its answer is decoded and
checked field by field before anything is stored. Anything that does not match
the expected shape is rejected, never repaired.
"""
import json
import logging
import re
from typing import Any, List, Optional, Sequence

from ..exceptions import InvalidFormatError, LLMServiceError, UpstreamFailureError, ValidationError
from ..models.quiz import Question, Quiz
from .llm_service import LLMClient
from .quiz_store import QuizStore

logger = logging.getLogger(__name__)

MIN_QUESTIONS = 5
MAX_QUESTIONS = 10
OPTIONS_PER_QUESTION = 4
GENERATION_TEMPERATURE = 0.7

QUIZ_SYSTEM_PROMPT = (
    "You are a quiz generator. Return only valid JSON arrays with no additional text or formatting."
)

_FENCE_RE = re.compile(r"```(?:json)?\n?")


def format_student_questions(student_questions: Optional[Sequence[str]]) -> str:
    """Numbered list of student questions, or "" when there are none."""
    if not student_questions:
        return ""
    lines = "\n".join(f"{i + 1}. {q}" for i, q in enumerate(student_questions))
    return f"\n\nStudent questions during the session:\n{lines}"


def build_quiz_prompt(topic: str, student_questions: Optional[Sequence[str]]) -> str:
    return f"""You are an educational quiz generator. Generate a quiz with {MIN_QUESTIONS}-{MAX_QUESTIONS} multiple choice questions based on the following topic and student questions.

Topic: {topic}{format_student_questions(student_questions)}

Generate questions that:
1. Cover the main topic comprehensively
2. Address concepts from student questions if provided
3. Have 4 options each (A, B, C, D)
4. Have exactly one correct answer
5. Are educational and appropriate

Return ONLY a valid JSON array in this exact format, with no additional text:
[
  {{
    "question": "Question text here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": 0
  }}
]

The correctAnswer should be the index (0-3) of the correct option."""


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers (``` or ```json) wherever they appear."""
    return _FENCE_RE.sub("", text.strip()).strip()


def _parse_question(index: int, item: Any) -> Question:
    if not isinstance(item, dict):
        raise InvalidFormatError(f"Question {index} is not an object")

    text = item.get("question")
    if not isinstance(text, str) or not text.strip():
        raise InvalidFormatError(f"Question {index} has no question text")

    options = item.get("options")
    if not isinstance(options, list) or len(options) != OPTIONS_PER_QUESTION:
        raise InvalidFormatError(f"Question {index} must have exactly {OPTIONS_PER_QUESTION} options")
    if not all(isinstance(o, str) for o in options):
        raise InvalidFormatError(f"Question {index} has non-text options")

    answer = item.get("correctAnswer")
    # bool is a subclass of int; true/false is not an answer index
    if isinstance(answer, bool) or not isinstance(answer, int):
        raise InvalidFormatError(f"Question {index} has a non-integer correctAnswer")
    if not 0 <= answer < OPTIONS_PER_QUESTION:
        raise InvalidFormatError(f"Question {index} correctAnswer {answer} is out of range")

    return Question(question=text, options=options, correctAnswer=answer)


def parse_quiz_response(response_text: str) -> List[Question]:
    """
    Decode the model's answer into questions.

    Raises:
        InvalidFormatError: not JSON, not an array, wrong number of questions
            or a malformed question
    """
    json_text = strip_code_fences(response_text or "")
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise InvalidFormatError("AI response is not valid JSON", cause=e) from e

    if not isinstance(data, list):
        raise InvalidFormatError("AI did not return a JSON array")

    if not MIN_QUESTIONS <= len(data) <= MAX_QUESTIONS:
        raise InvalidFormatError(
            f"AI returned {len(data)} questions, expected {MIN_QUESTIONS}-{MAX_QUESTIONS}"
        )

    return [_parse_question(i, item) for i, item in enumerate(data)]


class QuizGenerator:
    def __init__(self, llm: LLMClient, store: QuizStore):
        self.llm = llm
        self.store = store

    async def generate(
        self,
        topic: str,
        student_questions: Optional[Sequence[str]],
        room_name: str,
    ) -> Quiz:
        """
        Generate, validate and store a quiz.

        Exactly one quiz is stored on success; nothing is stored on failure.

        Raises:
            ValidationError: topic or room_name missing
            InvalidFormatError: the model's answer is not a valid question set
            UpstreamFailureError: the model call failed
        """
        if not topic or not room_name:
            raise ValidationError("Topic and roomName are required")

        prompt = build_quiz_prompt(topic, student_questions)

        try:
            response_text = await self.llm.complete(
                QUIZ_SYSTEM_PROMPT, prompt, temperature=GENERATION_TEMPERATURE
            )
        except LLMServiceError as e:
            logger.error(f"❌ Quiz generation call failed: {e}")
            raise UpstreamFailureError(str(e), cause=e) from e

        try:
            questions = parse_quiz_response(response_text)
        except InvalidFormatError as e:
            logger.error(f"❌ JSON Parse Error: {e}")
            raise

        quiz = await self.store.create(room_name, topic, questions)
        logger.info(f"✅ Quiz generated: {quiz.id} for room: {room_name}")
        return quiz
