from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from enum import Enum

class NoticeLevel(str, Enum):
    ERROR = "error"
    SUCCESS = "success"
    INFO = "info"

class Notice(SQLModel, table=True):
    id: int = Field(default=None, primary_key=True)
    token: str = Field(index=True)
    level: NoticeLevel = Field(default=NoticeLevel.ERROR)
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class NoticeRead(SQLModel):
    level: NoticeLevel
    message: str
