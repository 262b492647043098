"""
Health Check Endpoint

Liveness plus a database round trip, for load balancers and container probes.
"""

import time
import logging
from datetime import datetime, timezone
from typing import Dict, Any
from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from models import db

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__, url_prefix='/health')

_startup_time = time.time()


def check_database_health() -> Dict[str, Any]:
    """
    Check database connectivity.

    Returns dict with:
    - healthy: bool
    - latency_ms: response time
    - error: error message if unhealthy
    """
    start = time.time()
    try:
        db.session.execute(text("SELECT 1")).fetchone()
        db.session.rollback()  # Don't leave open transaction
        return {
            "healthy": True,
            "latency_ms": round((time.time() - start) * 1000, 2),
            "type": db.engine.dialect.name,
        }
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning(f"Database health check failed: {e}")
        return {
            "healthy": False,
            "latency_ms": round((time.time() - start) * 1000, 2),
            "error": str(e)[:100],
        }


@health_bp.route('', methods=['GET'])
def health():
    database = check_database_health()
    healthy = database["healthy"]
    return jsonify({
        "status": "success" if healthy else "error",
        "message": "healthy" if healthy else "database unavailable",
        "data": {
            "database": database,
            "uptime_seconds": round(time.time() - _startup_time, 1),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }), 200 if healthy else 503
