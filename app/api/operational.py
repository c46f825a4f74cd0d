"""
Operational and monitoring API endpoints
Provides metrics, version info, and other operational endpoints
"""

import os
import sys
import time
from datetime import datetime

import psutil
from fastapi import APIRouter, Request

from app.core.config import config
from app.core.logger import logger

router = APIRouter()

# Track service start time
start_time = time.time()


@router.get("/metrics")
def get_metrics(request: Request):
    """
    Process and host metrics for monitoring tools.
    """
    process = psutil.Process()
    memory_info = process.memory_info()
    system_memory = psutil.virtual_memory()
    disk_usage = psutil.disk_usage("/")

    logger.debug(
        "Metrics endpoint called",
        metadata={"event": "metrics_requested", "memory_percent": system_memory.percent}
    )

    return {
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "uptime_seconds": round(time.time() - start_time, 2),
        "process": {
            "pid": os.getpid(),
            "memory_rss_mb": round(memory_info.rss / 1024 / 1024, 2),
            "cpu_percent": process.cpu_percent(),
        },
        "system": {
            "memory_used_percent": round(system_memory.percent, 2),
            "disk_used_percent": round(disk_usage.percent, 2),
        },
        "runtime": {
            "python_version": sys.version.split()[0],
            "platform": sys.platform,
        },
    }


@router.get("/version")
def get_version(request: Request):
    return {
        "service": config.service_name,
        "version": config.service_version,
        "api_version": config.api_version,
        "environment": config.environment,
    }


@router.get("/info")
def get_service_info(request: Request):
    """Service configuration summary (no secrets)"""
    return {
        "service": config.service_name,
        "version": config.service_version,
        "api_version": config.api_version,
        "environment": config.environment,
        "uptime_seconds": round(time.time() - start_time, 2),
        "configuration": {
            "mongodb_host": config.mongodb_host,
            "mongodb_port": config.mongodb_port,
            "mongodb_database": config.mongodb_database,
            "products_page_size": config.products_page_size,
            "rate_limit_enabled": config.rate_limit_enabled,
            "log_level": config.log_level,
        },
        "timestamp": datetime.now().isoformat(),
    }
