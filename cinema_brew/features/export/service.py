# cinema_brew/features/export/service.py
import re
import unicodedata
from typing import Callable, Dict, List

from reportlab.platypus import Flowable

from cinema_brew.features.production.schemas import ProductionPackage
from cinema_brew.lib.imaging import open_data_uri_image
from cinema_brew.lib.pdf import BODY, HEADING, SUBHEADING, gap, labelled, make_pdf, picture, text
from cinema_brew.logger import get_logger

log = get_logger(__name__)

SECTION_TITLES = {
    "screenplay": "Screenplay",
    "characters": "Characters",
    "storyboard": "Storyboard",
    "breakdown": "Script Breakdown",
    "budget": "Budget",
    "pitchDeck": "Pitch Deck",
    "crew": "Crew Needs",
    "locations": "Locations",
    "schedule": "Shooting Schedule",
    "soundDesign": "Sound Design",
}

def _slugify(label: str) -> str:
    s = unicodedata.normalize("NFKD", label).encode("ascii", "ignore").decode("ascii")
    s = re.sub(r"[^a-zA-Z0-9]+", "_", s).strip("_").lower()
    return s or "production"

def _join(items) -> str:
    return ", ".join(str(i) for i in items) or "-"

def _money(amount: float) -> str:
    return f"${amount:,.0f}"

# -------- per-section story builders --------

def _screenplay(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for line in pkg.screenplay.splitlines():
        stripped = line.strip()
        if not stripped:
            story.append(gap(6))
        elif stripped.startswith("#"):
            story.append(text(stripped.lstrip("#").strip(), HEADING))
        else:
            story.append(text(line, BODY))
    return story

def _characters(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for c in pkg.characters:
        story += [
            text(f"{c.name} ({c.role})" if c.role else c.name, HEADING),
            text(c.description),
            labelled("Motivation", c.motivation),
            labelled("Arc", c.arc),
            labelled("Psychological depth", c.psychological_depth),
            gap(),
        ]
    return story

def _storyboard(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for i, frame in enumerate(pkg.storyboard, start=1):
        story.append(text(f"Frame {i}", SUBHEADING))
        img = open_data_uri_image(frame.image_url)
        if img is not None:
            story.append(picture(img))
        else:
            story.append(text("[frame unavailable]"))
        story += [text(frame.scene_description), gap()]
    return story

def _breakdown(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for item in pkg.breakdown:
        story += [
            text(f"Scene {item.scene}: {item.location} ({item.time_of_day})", HEADING),
            labelled("Characters", _join(item.characters)),
            labelled("Props", _join(item.props)),
            labelled("Costumes", _join(item.costumes)),
            labelled("SFX", _join(item.sfx)),
            labelled("VFX", _join(item.vfx)),
            labelled("Vehicles", _join(item.vehicles)),
            gap(),
        ]
    return story

def _budget(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = [text(f"Total: {_money(pkg.budget_total)}", HEADING), gap()]
    for item in pkg.budget:
        story += [
            text(f"{item.category} / {item.label}: {_money(item.estimated_cost)}", SUBHEADING),
            text(item.description),
        ]
    return story

def _pitch_deck(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for i, slide in enumerate(pkg.pitch_deck, start=1):
        story += [text(f"{i}. {slide.title}", HEADING), text(slide.content)]
        if slide.image_prompt:
            story.append(labelled("Visual", slide.image_prompt))
        story.append(gap())
    return story

def _crew(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for member in pkg.crew_needs:
        story += [text(member.role, SUBHEADING), text(member.description)]
    return story

def _locations(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for loc in pkg.locations:
        story += [
            text(loc.name, HEADING),
            labelled("Requirements", loc.requirements),
            labelled("Aesthetic", loc.aesthetic),
            gap(),
        ]
    return story

def _schedule(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for day in pkg.schedule:
        story += [
            text(f"Day {day.day_number}", HEADING),
            labelled("Scenes", _join(day.scenes)),
            labelled("Estimated hours", f"{day.estimated_hours:g}"),
            text(day.notes),
            gap(),
        ]
    return story

def _sound_design(pkg: ProductionPackage) -> List[Flowable]:
    story: List[Flowable] = []
    for cue in pkg.sound_design:
        story += [
            text(f"Scene {cue.scene_number}", HEADING),
            labelled("Environment", cue.environment),
            labelled("Emotional goal", cue.emotional_goal),
            labelled("Cues", _join(cue.cues)),
            gap(),
        ]
    return story

_BUILDERS: Dict[str, Callable[[ProductionPackage], List[Flowable]]] = {
    "screenplay": _screenplay,
    "characters": _characters,
    "storyboard": _storyboard,
    "breakdown": _breakdown,
    "budget": _budget,
    "pitchDeck": _pitch_deck,
    "crew": _crew,
    "locations": _locations,
    "schedule": _schedule,
    "soundDesign": _sound_design,
}

# -------- public entry --------

def export_filename(section: str, pkg: ProductionPackage, requested: str | None = None) -> str:
    base = _slugify(requested) if requested else f"{_slugify(pkg.concept)}_{section}"
    return f"{base}.pdf"

def build_section_pdf(section: str, pkg: ProductionPackage) -> bytes:
    builder = _BUILDERS.get(section)
    if builder is None:
        raise ValueError(f"unknown section: {section}")
    story = builder(pkg)
    if not story:
        story = [text("Nothing in this section yet.")]
    return make_pdf(f"{SECTION_TITLES[section]}: {pkg.concept}", story)
