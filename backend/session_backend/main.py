import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routers import assistant, quiz, room
from .services.livekit_service import LiveKitService
from .services.llm_service import LLMClient
from .services.quiz_store import QuizStore

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# --------------------------------------------------------
# LIFESPAN
# --------------------------------------------------------
# Quizzes are kept in memory only; a restart starts from an empty store.
# --------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.quiz_store = QuizStore()
    app.state.llm_client = LLMClient(settings)
    app.state.livekit_service = LiveKitService(settings)

    if not settings.groq_api_key:
        logger.warning("⚠️ GROQ_API_KEY not set, AI endpoints will fail")
    if not settings.livekit_configured:
        logger.warning("⚠️ LiveKit ENV variables missing, /token and /end-room will fail")

    yield

    logger.info(f"🔌 Shutting down ({len(app.state.quiz_store)} quizzes discarded)")


app = FastAPI(lifespan=lifespan)


# --------------------------------------------------------
# CORS (Frontend)
# --------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --------------------------------------------------------
# SECURITY HEADERS
# --------------------------------------------------------
@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["X-Frame-Options"] = "SAMEORIGIN"
    return response


app.include_router(room.router)  # 🎥 LiveKit tokens + end room
app.include_router(assistant.router)  # 🤖 Ask AI, question extraction, summaries
app.include_router(quiz.router)  # 📝 Generate / submit / results


# --------------------------------------------------------
# HEALTH CHECK
# --------------------------------------------------------
@app.get("/health")
async def health_check(request: Request):
    return {
        "status": "ok",
        "time": datetime.now().isoformat(),
        "quizzes": len(request.app.state.quiz_store),
    }


def run():
    import uvicorn

    logger.info(f"Backend server running on http://localhost:{settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
