from fastapi import APIRouter, status

from ..core.time_utils import utc_now
from ..core.db import get_session
from ..core.relation import get_relations_param

router = APIRouter()

# Last known database state
db_status_cache = {
    'last_checked': None,
    'is_online': None,
    'last_error': None
}


def check_database() -> bool:
    """Check if database is available."""
    try:
        with get_session() as session:
            # Simple query to test connectivity
            session.connection().exec_driver_sql("SELECT 1").first()
            db_status_cache['is_online'] = True
            db_status_cache['last_error'] = None
            return True
    except Exception as e:
        db_status_cache['is_online'] = False
        db_status_cache['last_error'] = str(e)
        return False
    finally:
        db_status_cache['last_checked'] = utc_now()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health() -> dict:
    return {"status": "ok"}


@router.get("/db-status", status_code=status.HTTP_200_OK)
def db_status() -> dict:
    """Get current database and configuration storage status."""
    online = check_database()
    relation = get_relations_param() if online else None
    return {
        "status": "online" if db_status_cache['is_online'] else "offline",
        "last_checked": db_status_cache['last_checked'].isoformat() if db_status_cache['last_checked'] else None,
        "last_error": db_status_cache['last_error'],
        "comment_work": bool(relation and relation.commwork),
        "mime_work": bool(relation and relation.mimework),
    }
