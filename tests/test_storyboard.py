# tests/test_storyboard.py
import threading
import time

import pytest
from conftest import rate_limit_error, tiny_png_base64
from cinema_brew.features.production import service
from cinema_brew.features.production.schemas import StoryboardPrompt
from cinema_brew.features.production.service import generate_image_with_retry, render_storyboard


def _counting(fn):
    calls = []
    lock = threading.Lock()

    def _wrapped(prompt):
        with lock:
            calls.append(prompt)
        return fn(prompt)
    return _wrapped, calls

# --------------------
# image fetcher
# --------------------

@pytest.mark.asyncio
async def test_image_success_returns_data_uri():
    url = await generate_image_with_retry("a vault in orbit")
    assert url == f"data:image/png;base64,{tiny_png_base64()}"

@pytest.mark.asyncio
async def test_image_without_payload_returns_none(mock_images):
    fn, calls = _counting(lambda p: None)
    mock_images(fn)
    assert await generate_image_with_retry("x") is None
    assert len(calls) == 1

@pytest.mark.asyncio
async def test_rate_limited_twice_stops_after_two_attempts(mock_images):
    def _always_limited(prompt):
        raise rate_limit_error()
    fn, calls = _counting(_always_limited)
    mock_images(fn)
    assert await generate_image_with_retry("x", retries=1) is None
    assert len(calls) == 2

@pytest.mark.asyncio
async def test_rate_limited_once_then_succeeds(mock_images):
    attempts = {"n": 0}
    def _flaky(prompt):
        attempts["n"] += 1
        if attempts["n"] == 1:
            raise rate_limit_error()
        return tiny_png_base64()
    mock_images(_flaky)
    assert (await generate_image_with_retry("x", retries=1)).startswith("data:image/png;base64,")
    assert attempts["n"] == 2

@pytest.mark.asyncio
async def test_other_error_is_not_retried(mock_images):
    def _boom(prompt):
        raise RuntimeError("content policy violation")
    fn, calls = _counting(_boom)
    mock_images(fn)
    assert await generate_image_with_retry("x", retries=3) is None
    assert len(calls) == 1

@pytest.mark.asyncio
async def test_backoff_waits_within_configured_range(mock_images, monkeypatch):
    monkeypatch.setattr(service, "RETRY_BACKOFF", (5.0, 10.0))
    waits = []

    async def _fake_sleep(seconds):
        waits.append(seconds)
    monkeypatch.setattr(service.asyncio, "sleep", _fake_sleep)

    def _limited(prompt):
        raise rate_limit_error()
    mock_images(_limited)
    await generate_image_with_retry("x", retries=1)
    assert len(waits) == 1
    assert 5.0 <= waits[0] <= 10.0

# --------------------
# fan-out
# --------------------

@pytest.mark.asyncio
async def test_empty_prompt_list_issues_no_requests(mock_openai):
    assert await render_storyboard([]) == []
    assert mock_openai["images"] == []

@pytest.mark.asyncio
async def test_one_frame_per_prompt_in_input_order(mock_images):
    def _slow_first(prompt):
        if prompt == "p0":
            time.sleep(0.2)  # finishes last
        if prompt == "p2":
            raise RuntimeError("boom")
        return tiny_png_base64()
    mock_images(_slow_first)

    prompts = [StoryboardPrompt(scene_description=f"scene {i}", prompt=f"p{i}") for i in range(4)]
    frames = await render_storyboard(prompts)

    assert len(frames) == len(prompts)
    assert [f.scene_description for f in frames] == ["scene 0", "scene 1", "scene 2", "scene 3"]
    assert [bool(f.image_url) for f in frames] == [True, True, False, True]

@pytest.mark.asyncio
async def test_missing_prompt_uses_cinematic_fallback(mock_openai):
    frames = await render_storyboard([StoryboardPrompt(scene_description="Mara cracks the safe", prompt="")])
    assert len(frames) == 1
    assert mock_openai["images"] == [
        "Cinematic film still of: Mara cracks the safe. 35mm photography, movie lighting."
    ]

@pytest.mark.asyncio
async def test_requests_are_staggered_by_index(monkeypatch):
    monkeypatch.setattr(service, "STAGGER_SECONDS", 1.5)
    delays = []

    async def _fake_sleep(seconds):
        delays.append(seconds)
    monkeypatch.setattr(service.asyncio, "sleep", _fake_sleep)

    prompts = [StoryboardPrompt(scene_description=f"s{i}", prompt=f"p{i}") for i in range(3)]
    await render_storyboard(prompts)
    assert sorted(delays) == [0, 1.5, 3.0]
