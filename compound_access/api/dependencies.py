# =======================================================================================
# compound_access/api/dependencies.py - FastAPI Dependencies
# =======================================================================================
from fastapi import HTTPException
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from ..database import db_manager
from ..utils.exceptions import RecordStoreError

def get_db_connection() -> Connection:
    """Dependency to get a transactional database connection."""
    try:
        with db_manager.get_connection() as conn:
            yield conn
    except HTTPException:
        raise
    except (SQLAlchemyError, RecordStoreError) as e:
        raise HTTPException(status_code=500, detail=f"Database connection error: {str(e)}")
