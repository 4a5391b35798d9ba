# models/user.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class User(BaseModel):
    id: str
    firstName: str
    middleName: Optional[str] = None
    lastName: str
    email: str
    createdAt: datetime
