from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class HeadlineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    match_percent: Optional[str] = None
    desc: Optional[str] = None
    entities: Optional[str] = None
    examples: Optional[str] = None
    category: Optional[str] = None
    date_processed: datetime
    type: str
    topic: Optional[str] = None
    score: Optional[str] = None


class DailyRunOut(BaseModel):
    summarised: int
    regenerated: bool
    headlines: int
