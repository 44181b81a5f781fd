# tests/conftest.py
import json
import os
import tempfile

# Configure before the app (and its config singleton) is imported
_TMP = tempfile.mkdtemp(prefix="cinema_brew_test_")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP, 'test.db')}")
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("STORYBOARD_STAGGER_SECONDS", "0")
os.environ.setdefault("IMAGE_RETRY_BACKOFF_MIN", "0")
os.environ.setdefault("IMAGE_RETRY_BACKOFF_MAX", "0")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx
import openai
import pytest
from fastapi.testclient import TestClient

from cinema_brew.main import app
from cinema_brew.db import init_db

init_db()

# -------- Test client --------
@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c

# -------- Utilities --------
def tiny_png_base64() -> str:
    # 1x1 transparent PNG
    return (
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGNg"
        "YAAAAAMAASsJTYQAAAAASUVORK5CYII="
    )

def rate_limit_error(message: str = "Rate limit reached") -> openai.RateLimitError:
    request = httpx.Request("POST", "https://api.openai.com/v1/images/generations")
    response = httpx.Response(429, request=request)
    return openai.RateLimitError(message, response=response, body={"code": "rate_limit_exceeded"})

def sample_content(n_prompts: int = 3) -> dict:
    """A fully populated content-model reply."""
    return {
        "screenplay": "# A HEIST IN ZERO GRAVITY\n\nINT. ORBITAL VAULT - NIGHT\n\nMARA floats toward the safe.",
        "characters": [
            {
                "name": "Mara Voss",
                "role": "Protagonist",
                "description": "Ex-astronaut turned thief.",
                "motivation": "Pay off her brother's debt.",
                "arc": "From loner to leader.",
                "psychologicalDepth": "Fears open space she once loved.",
            }
        ],
        "breakdown": [
            {
                "scene": 1,
                "location": "Orbital vault",
                "timeOfDay": "Night",
                "characters": ["Mara Voss"],
                "props": ["Magnetic boots"],
                "costumes": ["EVA suit"],
                "sfx": [],
                "vfx": ["Zero-g hair"],
                "vehicles": ["Shuttle"],
            }
        ],
        "budget": [
            {"category": "Production", "label": "Wire rigs", "estimatedCost": 120000, "description": "Flying rigs."},
            {"category": "Post", "label": "VFX", "estimatedCost": 80000.5, "description": "Weightlessness."},
        ],
        "pitchDeck": [{"title": "Logline", "content": "Ocean's Eleven meets Gravity."}],
        "crewNeeds": [{"role": "Stunt Coordinator", "description": "Wire work specialist."}],
        "locations": [{"name": "Vault set", "requirements": "Green screen stage", "aesthetic": "Cold steel"}],
        "schedule": [{"dayNumber": 1, "scenes": [1], "estimatedHours": 12, "notes": "Rig day."}],
        "soundDesign": [
            {"sceneNumber": 1, "environment": "Hum of life support", "emotionalGoal": "Dread", "cues": ["Breathing"]}
        ],
        "storyboardPrompts": [
            {"sceneDescription": f"Scene {i + 1}", "prompt": f"Frame prompt {i + 1}"}
            for i in range(n_prompts)
        ],
    }

# -------- Mocks for OpenAI --------
class _MockImageData:
    def __init__(self, b64_json):
        self.b64_json = b64_json

class _MockImagesResponse:
    def __init__(self, b64_json):
        self.data = [_MockImageData(b64_json)] if b64_json else []

class _MockMessage:
    def __init__(self, content: str):
        self.content = content

class _MockChoice:
    def __init__(self, content: str):
        self.message = _MockMessage(content)

class _MockChatResponse:
    def __init__(self, content: str):
        self.choices = [_MockChoice(content)]

@pytest.fixture(autouse=True)
def mock_openai(monkeypatch):
    """
    Auto-mock the shared OpenAI client so tests don't hit the network.
    Records every call on the returned object.
    """
    from cinema_brew.lib import openai_client

    calls = {"chat": [], "images": []}

    def _fake_images_generate(model, prompt, size, n):
        calls["images"].append(prompt)
        return _MockImagesResponse(tiny_png_base64())

    def _fake_chat_create(model, temperature, messages, **kwargs):
        calls["chat"].append(messages)
        return _MockChatResponse(json.dumps(sample_content()))

    monkeypatch.setattr(openai_client.client.images, "generate", _fake_images_generate)
    monkeypatch.setattr(openai_client.client.chat.completions, "create", _fake_chat_create)
    yield calls

@pytest.fixture(autouse=True)
def no_delays(monkeypatch):
    from cinema_brew.features.production import service
    monkeypatch.setattr(service, "STAGGER_SECONDS", 0)
    monkeypatch.setattr(service, "RETRY_BACKOFF", (0, 0))

@pytest.fixture
def mock_images(monkeypatch):
    """Swap in a custom images.generate: mock_images(fn) where fn(prompt) returns b64 or raises."""
    from cinema_brew.lib import openai_client

    def _install(fn):
        def _fake(model, prompt, size, n):
            return _MockImagesResponse(fn(prompt))
        monkeypatch.setattr(openai_client.client.images, "generate", _fake)
    return _install

@pytest.fixture
def mock_chat(monkeypatch):
    """Swap in a custom chat.completions.create: mock_chat(fn) where fn() returns text or raises."""
    from cinema_brew.lib import openai_client

    def _install(fn):
        def _fake(model, temperature, messages, **kwargs):
            return _MockChatResponse(fn())
        monkeypatch.setattr(openai_client.client.chat.completions, "create", _fake)
    return _install
