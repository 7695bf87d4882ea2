"""
Health endpoint.
No authentication required.
"""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.db.session import is_using_sqlite_fallback
from app.dependencies import DbSession

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: DbSession):
    """
    Service health check endpoint.

    Returns:
        {"status": "ok"} when service is healthy
        {"status": "degraded", "issues": [...]} when there are issues
    """
    issues = []
    warnings = []

    if is_using_sqlite_fallback():
        warnings.append("Using SQLite dev fallback - PostgreSQL not configured")

    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database query failed: {e}")
        issues.append(f"Database: {str(e)}")

    if issues:
        return {
            "status": "degraded",
            "issues": issues,
        }

    response = {
        "status": "ok",
        "database": "sqlite (dev fallback)" if is_using_sqlite_fallback() else "postgresql",
    }

    if warnings:
        response["warnings"] = warnings

    return response
