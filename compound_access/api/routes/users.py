# =======================================================================================
# compound_access/api/routes/users.py - Staff User Endpoints
# =======================================================================================
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.engine import Connection
from ...models.schemas import User
from ...services.user_service import UserService
from ..dependencies import get_db_connection

router = APIRouter()
user_service = UserService()


@router.get("/users", response_model=List[User])
def list_users(conn: Connection = Depends(get_db_connection)):
    return user_service.list_users(conn)


@router.get("/users/current", response_model=User)
def get_current_user(conn: Connection = Depends(get_db_connection)):
    user = user_service.get_current_user(conn)
    if not user:
        raise HTTPException(status_code=404, detail="No users configured")
    return user
