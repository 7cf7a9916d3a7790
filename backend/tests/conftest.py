import json
from typing import Dict, List, Optional

import jwt
import pytest
from jwt.exceptions import InvalidTokenError

from session_backend.exceptions import LLMServiceError
from session_backend.models.quiz import Question
from session_backend.services.quiz_store import QuizStore

# Answer key [0, 1, 1, 3, 2]
PHOTOSYNTHESIS_QUESTIONS = [
    {
        "question": "Which gas do plants absorb during photosynthesis?",
        "options": ["Carbon dioxide", "Oxygen", "Nitrogen", "Helium"],
        "correctAnswer": 0,
    },
    {
        "question": "Where does photosynthesis mainly take place?",
        "options": ["Roots", "Chloroplasts", "Stem", "Flowers"],
        "correctAnswer": 1,
    },
    {
        "question": "Which pigment captures light energy?",
        "options": ["Carotene", "Chlorophyll", "Melanin", "Hemoglobin"],
        "correctAnswer": 1,
    },
    {
        "question": "What is released as a by-product?",
        "options": ["Carbon dioxide", "Nitrogen", "Methane", "Oxygen"],
        "correctAnswer": 3,
    },
    {
        "question": "What sugar is produced?",
        "options": ["Sucrose", "Lactose", "Glucose", "Maltose"],
        "correctAnswer": 2,
    },
]


class FakeLLM:
    """Stands in for LLMClient: returns queued responses and records every call."""

    def __init__(self, responses: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []

    async def complete(self, system_prompt, user_prompt, temperature, max_tokens=None):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def quiz_json():
    return json.dumps(PHOTOSYNTHESIS_QUESTIONS)


@pytest.fixture
def questions():
    return [Question(**q) for q in PHOTOSYNTHESIS_QUESTIONS]


@pytest.fixture
def store():
    return QuizStore()


@pytest.fixture
def fake_llm(quiz_json):
    return FakeLLM([quiz_json])


@pytest.fixture
def failing_llm():
    return FakeLLM(error=LLMServiceError("Chat completion failed (503): upstream unavailable"))


def decode_livekit_token(token: str, api_secret: str) -> Optional[Dict]:
    """Verify a LiveKit token's signature and return its claims, or None if invalid."""
    try:
        return jwt.decode(token, api_secret, algorithms=["HS256"])
    except InvalidTokenError:
        return None
