"""
FastAPI dependencies. Shared objects are created in the app lifespan and kept
on app.state; tests swap them with app.dependency_overrides.
"""
from fastapi import Depends, Request

from .services.assistant_service import AssistantService
from .services.livekit_service import LiveKitService
from .services.llm_service import LLMClient
from .services.quiz_generator import QuizGenerator
from .services.quiz_grader import QuizGrader
from .services.quiz_results import QuizResults
from .services.quiz_store import QuizStore


def get_quiz_store(request: Request) -> QuizStore:
    return request.app.state.quiz_store


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client


def get_livekit_service(request: Request) -> LiveKitService:
    return request.app.state.livekit_service


def get_quiz_generator(
    llm: LLMClient = Depends(get_llm_client),
    store: QuizStore = Depends(get_quiz_store),
) -> QuizGenerator:
    return QuizGenerator(llm, store)


def get_quiz_grader(store: QuizStore = Depends(get_quiz_store)) -> QuizGrader:
    return QuizGrader(store)


def get_quiz_results(store: QuizStore = Depends(get_quiz_store)) -> QuizResults:
    return QuizResults(store)


def get_assistant_service(llm: LLMClient = Depends(get_llm_client)) -> AssistantService:
    return AssistantService(llm)
