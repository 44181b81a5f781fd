# cinema_brew/features/production/schemas.py
from typing import Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; null means 'not given'."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# ----- Sections -----

class Character(CamelModel):
    name: str = ""
    role: str = ""
    description: str = ""
    motivation: str = ""
    arc: str = ""
    psychological_depth: str = ""

class ScriptBreakdownItem(CamelModel):
    scene: int = 0
    location: str = ""
    time_of_day: str = ""
    characters: List[str] = Field(default_factory=list)
    props: List[str] = Field(default_factory=list)
    costumes: List[str] = Field(default_factory=list)
    sfx: List[str] = Field(default_factory=list)
    vfx: List[str] = Field(default_factory=list)
    vehicles: List[str] = Field(default_factory=list)

class BudgetItem(CamelModel):
    category: str = ""
    label: str = ""
    estimated_cost: float = 0.0
    description: str = ""

class PitchDeckSlide(CamelModel):
    title: str = ""
    content: str = ""
    image_prompt: str = ""  # optional art direction for the slide

class CrewNeed(CamelModel):
    role: str = ""
    description: str = ""

class Location(CamelModel):
    name: str = ""
    requirements: str = ""
    aesthetic: str = ""

class ScheduleDay(CamelModel):
    day_number: int = 0
    scenes: List[int] = Field(default_factory=list)
    estimated_hours: float = 0.0
    notes: str = ""

class SoundCue(CamelModel):
    scene_number: int = 0
    environment: str = ""
    emotional_goal: str = ""
    cues: List[str] = Field(default_factory=list)

class StoryboardPrompt(CamelModel):
    scene_description: str = ""
    prompt: str = ""

class StoryboardFrame(CamelModel):
    scene_description: str = ""
    image_url: str = ""  # "" = frame failed to render


# ----- Documents -----

class ProductionContent(CamelModel):
    """What the content model returns. Every section may be missing."""
    screenplay: str = ""
    characters: List[Character] = Field(default_factory=list)
    breakdown: List[ScriptBreakdownItem] = Field(default_factory=list)
    budget: List[BudgetItem] = Field(default_factory=list)
    pitch_deck: List[PitchDeckSlide] = Field(default_factory=list)
    crew_needs: List[CrewNeed] = Field(default_factory=list)
    locations: List[Location] = Field(default_factory=list)
    schedule: List[ScheduleDay] = Field(default_factory=list)
    sound_design: List[SoundCue] = Field(default_factory=list)
    storyboard_prompts: List[StoryboardPrompt] = Field(default_factory=list)

    @property
    def budget_total(self) -> float:
        return sum(item.estimated_cost for item in self.budget)

class ProductionPackage(ProductionContent):
    concept: str
    storyboard: List[StoryboardFrame] = Field(default_factory=list)
    is_locked: bool = False


# ----- API -----

class ProductionRequest(CamelModel):
    concept: str = Field(..., min_length=1, description="One-line film idea")

    @field_validator("concept")
    @classmethod
    def concept_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("concept must not be blank")
        return v
