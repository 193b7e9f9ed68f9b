from fastapi import APIRouter

from .quiz import router as quiz_router
from .session import router as session_router

router = APIRouter()
router.include_router(quiz_router, prefix="/quiz")
router.include_router(session_router, prefix="/session")
