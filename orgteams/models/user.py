from sqlmodel import SQLModel
from typing import Optional

class LoggedInUser(SQLModel):
    name: str
    email: Optional[str] = None
