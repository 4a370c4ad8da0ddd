"""
Health Service

Liveness, readiness and detailed status of the backing services.
"""

import logging
import os
import platform
import time
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from app.core.ai_service import AIService
from app.db.session import Database

logger = logging.getLogger(__name__)

STATUS_OK = "OK"
STATUS_WARNING = "WARNING"
STATUS_ERROR = "ERROR"
STATUS_DEGRADED = "DEGRADED"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HealthService:
    """Health reports for probes and operators"""

    def __init__(self, database: Database, ai_service: AIService, version: str, environment: str, started_at: float):
        self.database = database
        self.ai_service = ai_service
        self.version = version
        self.environment = environment
        self.started_at = started_at

    def uptime(self) -> float:
        return round(time.monotonic() - self.started_at, 3)

    async def detailed(self) -> Tuple[int, Dict[str, Any]]:
        """
        Full report and the HTTP status to send with it.

        Database trouble degrades the service (503); a missing AI key is
        only a warning.
        """
        health: Dict[str, Any] = {
            "status": STATUS_OK,
            "timestamp": _now(),
            "uptime": self.uptime(),
            "services": {},
            "version": self.version,
            "environment": self.environment,
        }

        db_health = await self.database.health_check()
        health["services"]["database"] = db_health
        has_errors = db_health.get("status") != "healthy"

        stats = self.ai_service.get_usage_stats()
        health["services"]["ai"] = {
            "status": STATUS_OK if stats["configured"] else STATUS_WARNING,
            "message": "API key configured" if stats["configured"] else "API key not configured",
            "model": stats["model"],
            "features": stats["features"],
        }

        health["system"] = {
            "platform": platform.system().lower(),
            "python_version": platform.python_version(),
            "pid": os.getpid(),
        }

        if has_errors:
            health["status"] = STATUS_DEGRADED
        return (200 if health["status"] == STATUS_OK else 503), health

    def ping(self) -> Dict[str, Any]:
        return {"status": STATUS_OK, "message": "pong", "timestamp": _now()}

    async def ready(self) -> Tuple[int, Dict[str, Any]]:
        """Readiness: the database answers SELECT 1"""
        try:
            await self.database.ping()
        except Exception as e:
            logger.error(f"Readiness check failed: {e}", exc_info=True)
            return 503, {"status": "not ready", "error": "Database connection failed", "timestamp": _now()}
        return 200, {"status": "ready", "timestamp": _now()}

    def live(self) -> Dict[str, Any]:
        return {"status": "alive", "uptime": self.uptime(), "timestamp": _now()}
