# cinema_brew/features/export/schemas.py
from typing import Literal, Optional
from pydantic import BaseModel, Field
from cinema_brew.features.production.schemas import ProductionPackage

Section = Literal[
    "screenplay",
    "characters",
    "storyboard",
    "breakdown",
    "budget",
    "pitchDeck",
    "crew",
    "locations",
    "schedule",
    "soundDesign",
]

class ExportPdfRequest(BaseModel):
    section: Section
    package: ProductionPackage
    filename: Optional[str] = Field(None, description="Download name without extension")
