"""
Classroom assistant helpers: short answers to student questions, question
extraction from voice transcripts and end-of-class summaries.
"""
import logging
from typing import Optional, Sequence

from ..exceptions import ValidationError
from .llm_service import LLMClient
from .quiz_generator import format_student_questions

logger = logging.getLogger(__name__)

NO_QUESTION = "<NONE>"
NO_SUMMARY = "No summary available."

ASK_SYSTEM_PROMPT = (
    "You are a teacher assistant. Give SHORT and SWEET answers only — maximum 1 to 2 sentences. "
    "Use simple language a student can understand. No bullet points, no long explanations. "
    "Be direct and concise."
)

EXTRACT_SYSTEM_PROMPT = (
    "You extract core questions from classroom dialogue. "
    "Return only the extracted question text, or an empty string if none found."
)

SUMMARY_SYSTEM_PROMPT = "You are an educational assistant. Provide concise class summaries."


def build_extract_prompt(transcript: str) -> str:
    return f"""You are a strict classroom assistant.
Extract ONLY the core academic question from the transcript.

RULES:
- If the transcript ONLY contains greetings, meta-talk (like "I have a doubt", "Wait", "One more thing"), or teacher-student chatter WITHOUT a specific subject-matter question, you MUST return exactly: {NO_QUESTION}
- DO NOT extract meta-sentences like "I have one doubt" or "I have a question".
- If a question is found, return ONLY the question text (e.g. "What is Python?").
- If NO specific question about the subject is found, return exactly: {NO_QUESTION}

EXAMPLES:
Transcript: "Hi ma'am, I have one doubt." -> Output: {NO_QUESTION}
Transcript: "Hello teacher, can you hear me? Yes. Okay, I have a doubt. What is a variable?" -> Output: What is a variable?
Transcript: "I have one more doubt." -> Output: {NO_QUESTION}
Transcript: "Ma'am, please explain the difference between list and tuple." -> Output: please explain the difference between list and tuple.

Transcript:
"{transcript}"

Extracted Question:"""


def build_summary_prompt(topic: str, student_questions: Optional[Sequence[str]]) -> str:
    return f"""You are an educational assistant. Provide a concise summary of the class based on the topic and student questions.

Topic: {topic}{format_student_questions(student_questions)}

Rules:
1. Keep the summary under 50 words.
2. Highlight the key concepts discussed.
3. Use a professional and encouraging tone.
4. Return ONLY the summary text."""


def clean_extracted_question(text: str) -> str:
    """Trim whitespace and one leading/trailing double quote."""
    cleaned = text.strip()
    if cleaned.startswith('"'):
        cleaned = cleaned[1:]
    if cleaned.endswith('"'):
        cleaned = cleaned[:-1]
    return cleaned


class AssistantService:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def ask(self, question: str) -> str:
        if not question:
            raise ValidationError("Question is required")
        return await self.llm.complete(ASK_SYSTEM_PROMPT, question, temperature=0.3, max_tokens=150)

    async def extract_question(self, transcript: str) -> str:
        """Returns the extracted question, or "<NONE>" when the model found none."""
        if not transcript:
            raise ValidationError("Transcript is required")
        text = await self.llm.complete(
            EXTRACT_SYSTEM_PROMPT, build_extract_prompt(transcript), temperature=0.1
        )
        return clean_extracted_question(text)

    async def summarize(self, topic: str, student_questions: Optional[Sequence[str]] = None) -> str:
        if not topic:
            raise ValidationError("Topic is required")
        text = await self.llm.complete(
            SUMMARY_SYSTEM_PROMPT, build_summary_prompt(topic, student_questions), temperature=0.5
        )
        return text.strip() or NO_SUMMARY
