"""Health checks: liveness (process up) and readiness (dependencies reachable)."""
from typing import Any, Dict

import pymysql

from app import db


def check_live() -> Dict[str, Any]:
    """Liveness: app process is running."""
    return {"status": "ok", "check": "live"}


def check_ready() -> Dict[str, Any]:
    """Readiness: the credential database is reachable."""
    db_ok = False
    if db.db_available:
        try:
            with db.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
            db_ok = True
        except pymysql.MySQLError:
            db_ok = False
    return {
        "status": "ok" if db_ok else "degraded",
        "check": "ready",
        "database": "up" if db_ok else "down",
    }
