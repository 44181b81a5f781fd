# cinema_brew/features/production/prompt.py
def build_production_prompt(*, concept: str) -> str:
    return f"""
Act as a world-class film producer. Create a comprehensive pre-production bible for: "{concept}".

Return a single JSON object with:
1. "screenplay": Industry-standard short screenplay (Markdown).
2. "characters": 3-5 deep profiles.
3. "breakdown": Scene-by-scene assets.
4. "budget": Realistic cost estimates + 15% contingency.
5. "pitchDeck": Business slides.
6. "crewNeeds": Department heads.
7. "locations": Scouting requirements for 3 sets.
8. "schedule": 5-day plan.
9. "soundDesign": Auditory plan.
10. "storyboardPrompts": Exactly 3 detailed objects with "sceneDescription" and "prompt".
""".strip()


def build_storyboard_fallback_prompt(*, scene_description: str) -> str:
    return f"Cinematic film still of: {scene_description}. 35mm photography, movie lighting."
