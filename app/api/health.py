"""
Health and probe API endpoints
"""

import asyncio
import time
from datetime import datetime
from typing import Any, Dict, List

import psutil
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.core.config import config
from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.db.mongodb import get_database

router = APIRouter()

# Track service start time
start_time = time.time()

MEMORY_THRESHOLD_PERCENT = 90
DISK_THRESHOLD_PERCENT = 85


@router.get("/health")
def health_check(request: Request):
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "version": config.api_version,
    }


@router.get("/health/ready")
async def readiness_check(request: Request):
    """Readiness probe - the database must answer before traffic is accepted"""
    checks = await perform_health_checks()
    failed_checks = [check for check in checks if check["status"] == "unhealthy"]

    if not failed_checks:
        return {
            "status": "ready",
            "service": config.service_name,
            "timestamp": datetime.now().isoformat(),
            "checks": checks,
        }

    logger.warning(
        f"Readiness check failed - {len(failed_checks)} checks failed",
        metadata={
            "failed_checks": [check["name"] for check in failed_checks],
            "event": "readiness_check_failed"
        }
    )
    return JSONResponse(
        status_code=503,
        content={
            "status": "not ready",
            "service": config.service_name,
            "timestamp": datetime.now().isoformat(),
            "checks": checks,
            "errors": [f"{check['name']}: {check.get('error', 'Unknown error')}" for check in failed_checks],
        },
    )


@router.get("/health/live")
def liveness_check(request: Request):
    """Liveness probe - check if the app is running"""
    return {
        "status": "alive",
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "uptime": time.time() - start_time,
    }


async def perform_health_checks() -> List[Dict[str, Any]]:
    return list(await asyncio.gather(check_database_health(), check_system_resources()))


async def check_database_health() -> Dict[str, Any]:
    """Ping MongoDB and time the round trip"""
    check_start = time.time()

    try:
        database = await get_database()
        await database.command("ping")
    except (PyMongoError, ErrorResponse) as e:
        response_time_ms = (time.time() - check_start) * 1000
        logger.error(
            "Database health check failed",
            error=e,
            metadata={"response_time_ms": response_time_ms, "event": "health_check_database_failed"}
        )
        return {
            "name": "database",
            "status": "unhealthy",
            "error": str(e),
            "response_time_ms": round(response_time_ms, 2),
            "timestamp": datetime.now().isoformat(),
        }

    response_time_ms = (time.time() - check_start) * 1000
    logger.debug(
        "Database health check passed",
        metadata={"response_time_ms": response_time_ms, "event": "health_check_database_success"}
    )
    return {
        "name": "database",
        "status": "healthy",
        "response_time_ms": round(response_time_ms, 2),
        "database": config.mongodb_database,
        "timestamp": datetime.now().isoformat(),
    }


async def check_system_resources() -> Dict[str, Any]:
    """Memory and disk pressure only degrade the service, they never fail readiness"""
    system_memory = psutil.virtual_memory()
    disk_usage = psutil.disk_usage("/")

    warnings = []
    if system_memory.percent > MEMORY_THRESHOLD_PERCENT:
        warnings.append(f"High system memory usage: {system_memory.percent:.1f}%")
    if disk_usage.percent > DISK_THRESHOLD_PERCENT:
        warnings.append(f"High disk usage: {disk_usage.percent:.1f}%")

    result = {
        "name": "system_resources",
        "status": "degraded" if warnings else "healthy",
        "metrics": {
            "process_memory_mb": round(psutil.Process().memory_info().rss / 1024 / 1024, 2),
            "system_memory_percent": round(system_memory.percent, 2),
            "disk_usage_percent": round(disk_usage.percent, 2),
            "uptime_seconds": round(time.time() - start_time, 2),
        },
        "timestamp": datetime.now().isoformat(),
    }
    if warnings:
        result["warnings"] = warnings
    return result
