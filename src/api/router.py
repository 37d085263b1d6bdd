"""API router aggregation."""

from fastapi import APIRouter

from src.api.health import router as health_router
from src.api.quiz import router as quiz_router
from src.api.results import router as results_router

api_router = APIRouter()
api_router.include_router(health_router)
# Single in-process quiz session
api_router.include_router(quiz_router)
# Stored results and roster reconciliation
api_router.include_router(results_router)
