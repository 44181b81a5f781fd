# cinema_brew/features/projects/schemas.py
import datetime
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class SaveProjectRequest(_Camel):
    user_id: int
    concept: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(..., description="Production package, stored as-is")

class SaveProjectResponse(BaseModel):
    id: int

class ProjectOut(_Camel):
    id: int
    user_id: int
    concept: str
    data: Dict[str, Any]
    created_at: datetime.datetime
