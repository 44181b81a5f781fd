# cinema_brew/features/production/service.py
import asyncio
import random
from typing import List, Optional, Sequence

from pydantic import ValidationError

from cinema_brew.config import config
from cinema_brew.errors import FormatError, QuotaError, TransientImageError, is_rate_limited
from cinema_brew.lib.imaging import to_data_uri
from cinema_brew.lib.json_tools import parse_model_response
from cinema_brew.lib.openai_client import client
from cinema_brew.logger import get_logger
from .prompt import build_production_prompt, build_storyboard_fallback_prompt
from .schemas import ProductionContent, ProductionPackage, StoryboardFrame, StoryboardPrompt

log = get_logger(__name__)

# Frame i starts i * STAGGER_SECONDS after the fan-out begins
STAGGER_SECONDS = config.storyboard_stagger_seconds
RETRY_BACKOFF = (config.image_retry_backoff_min, config.image_retry_backoff_max)

SYSTEM_MSG = (
    "You are a world-class film producer and development executive. "
    "Return ONLY a single JSON object that strictly conforms to the provided JSON Schema. "
    "No commentary, no markdown."
)

# -------- JSON Schema for response_format (OpenAI strict subset) --------

def _production_json_schema() -> dict:
    string  = {"type": "string"}
    integer = {"type": "integer"}
    number  = {"type": "number"}
    strings = {"type": "array", "items": string}

    def obj(props: dict) -> dict:
        # strict mode: required must list every key in properties
        return {
            "type": "object",
            "additionalProperties": False,
            "properties": props,
            "required": list(props.keys()),
        }

    def arr(item: dict) -> dict:
        return {"type": "array", "items": item}

    character = obj({
        "name": string,
        "role": string,
        "description": string,
        "motivation": string,
        "arc": string,
        "psychologicalDepth": string,
    })

    breakdown_item = obj({
        "scene": integer,
        "location": string,
        "timeOfDay": string,
        "characters": strings,
        "props": strings,
        "costumes": strings,
        "sfx": strings,
        "vfx": strings,
        "vehicles": strings,
    })

    budget_item = obj({
        "category": string,
        "label": string,
        "estimatedCost": number,
        "description": string,
    })

    slide = obj({"title": string, "content": string})
    crew = obj({"role": string, "description": string})
    location = obj({"name": string, "requirements": string, "aesthetic": string})

    schedule_day = obj({
        "dayNumber": integer,
        "scenes": arr(integer),
        "estimatedHours": number,
        "notes": string,
    })

    sound_cue = obj({
        "sceneNumber": integer,
        "environment": string,
        "emotionalGoal": string,
        "cues": strings,
    })

    storyboard_prompt = obj({"sceneDescription": string, "prompt": string})

    return obj({
        "screenplay": string,
        "characters": arr(character),
        "breakdown": arr(breakdown_item),
        "budget": arr(budget_item),
        "pitchDeck": arr(slide),
        "crewNeeds": arr(crew),
        "locations": arr(location),
        "schedule": arr(schedule_day),
        "soundDesign": arr(sound_cue),
        "storyboardPrompts": arr(storyboard_prompt),
    })

# -------- upstream calls (blocking; run in worker threads) --------

def _call_llm(prompt: str) -> str:
    resp = client.chat.completions.create(
        model=config.openai_text_model,
        temperature=config.text_temperature,
        response_format={
            "type": "json_schema",
            "json_schema": {"name": "ProductionPackage", "schema": _production_json_schema(), "strict": True},
        },
        messages=[{"role": "system", "content": SYSTEM_MSG}, {"role": "user", "content": prompt}],
    )
    return (resp.choices[0].message.content or "").strip()

def _request_image(prompt: str) -> Optional[str]:
    """
    One image request. Returns a data URI, or None when the response has no
    image payload. Every upstream failure becomes a TransientImageError,
    classified here once.
    """
    try:
        resp = client.images.generate(
            model=config.openai_image_model,
            prompt=prompt,
            size=config.storyboard_image_size,
            n=1,
        )
        for item in resp.data or []:
            b64 = getattr(item, "b64_json", None)
            if b64:
                return to_data_uri(b64)
        return None
    except Exception as e:
        raise TransientImageError(str(e), rate_limited=is_rate_limited(e)) from e

# -------- storyboard --------

async def generate_image_with_retry(prompt: str, retries: int = 1) -> Optional[str]:
    """Never raises: a frame that can't be rendered comes back as None."""
    try:
        return await asyncio.to_thread(_request_image, prompt)
    except TransientImageError as e:
        if e.rate_limited and retries > 0:
            wait = random.uniform(*RETRY_BACKOFF)
            log.warning(f"Quota hit for image. Retrying in {wait:.1f}s...")
            await asyncio.sleep(wait)
            return await generate_image_with_retry(prompt, retries - 1)
        log.warning(f"Image generation skipped due to quota or error: {e}")
        return None

async def _render_frame(index: int, item: StoryboardPrompt) -> StoryboardFrame:
    await asyncio.sleep(index * STAGGER_SECONDS)
    visual_prompt = (item.prompt or "").strip() or build_storyboard_fallback_prompt(
        scene_description=item.scene_description
    )
    image_url = await generate_image_with_retry(visual_prompt, retries=config.image_retries)
    if not image_url:
        log.info(f"Storyboard frame {index + 1} left empty")
    return StoryboardFrame(scene_description=item.scene_description, image_url=image_url or "")

async def render_storyboard(prompts: Sequence[StoryboardPrompt]) -> List[StoryboardFrame]:
    """
    Render one frame per prompt, staggered, all in flight together.
    result[i] always belongs to prompts[i].
    """
    if not prompts:
        return []
    frames = await asyncio.gather(*(_render_frame(i, p) for i, p in enumerate(prompts)))
    return list(frames)

# -------- public entry --------

async def generate_production_package(concept: str) -> ProductionPackage:
    if not concept or not concept.strip():
        raise ValueError("concept must not be empty")

    log.info(f"Brewing production package for concept: {concept!r}")
    prompt = build_production_prompt(concept=concept)

    try:
        raw = await asyncio.to_thread(_call_llm, prompt)
    except Exception as e:
        if is_rate_limited(e):
            log.warning(f"Content generation hit the API quota: {e}")
            raise QuotaError() from e
        raise

    data = parse_model_response(raw or "{}")
    try:
        content = ProductionContent.model_validate(data)
    except ValidationError as e:
        log.error(f"Model JSON failed validation: {e}\nData: {data}")
        raise FormatError() from e

    frames = await render_storyboard(content.storyboard_prompts)
    rendered = sum(1 for f in frames if f.image_url)
    log.info(f"Production package ready: {rendered}/{len(frames)} storyboard frames rendered")

    return ProductionPackage(
        **content.model_dump(),
        concept=concept,
        storyboard=frames,
        is_locked=False,
    )
