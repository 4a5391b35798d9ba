# routes/users.py
from fastapi import APIRouter, Depends
from typing import List
import logging

from database import get_db
from errors import GatewayError
from models.user import User
from services.users import UserDirectory
from .students import to_http_error

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

@router.get("/", response_model=List[User])
async def get_users(db=Depends(get_db)):
    logger.info("Fetching users")
    try:
        return await UserDirectory(db).list_all()
    except GatewayError as e:
        raise to_http_error(e)
