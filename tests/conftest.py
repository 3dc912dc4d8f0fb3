"""
Shared pytest fixtures for the knowledge-base utilities.
"""
import json
import tempfile
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def config_file(temp_dir, monkeypatch) -> Path:
    """Point config.CONFIG_FILE at a temp file."""
    import config as config_module

    path = temp_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_FILE", path)
    return path


@pytest.fixture
def data_root(temp_dir, config_file) -> Path:
    """A personal data root that exists and is recorded in config.json."""
    root = temp_dir / "personal-data"
    root.mkdir()
    config_file.write_text(json.dumps({
        "personalDataPath": str(root),
        "lastUpdated": "2026-01-01T00:00:00+00:00"
    }))
    return root


@pytest.fixture
def sample_processing_config() -> dict:
    """Sample <root>/config/processing-config.json contents."""
    return {
        "model": "gemini-2.5-flash",
        "maxConcurrent": 3,
        "filterPolitical": True
    }


@pytest.fixture
def sample_library_html() -> str:
    """Video library page with two YouTube links and one unrelated link."""
    return """<!DOCTYPE html>
<html>
<body>
  <h1>AI Video Library</h1>
  <ol>
    <li><a href="https://www.youtube.com/watch?v=4ukqsKajWnk">Intro to Transformers</a></li>
    <li><a href="https://example.com/blog/agents">Blog post on agents</a></li>
    <li><a href="https://www.youtube.com/watch?v=dQw4w9WgXcQ">Fine-tuning walkthrough</a></li>
  </ol>
</body>
</html>
"""


@pytest.fixture
def sample_client_config() -> dict:
    """OAuth client credentials as downloaded from Cloud Console."""
    return {
        "installed": {
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-secret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["http://localhost"]
        }
    }


@pytest.fixture
def sample_video_items() -> list[dict]:
    """videos.list items as returned by the YouTube Data API."""
    return [
        {
            "id": "abc123",
            "snippet": {
                "title": "Building an LLM agent from scratch",
                "channelTitle": "AI Explained",
                "description": "x" * 500
            }
        },
        {
            "id": "def456",
            "snippet": {
                "title": "Election Night Recap",
                "channelTitle": "News Channel",
                "description": "Results from last night"
            }
        },
        {
            "id": "ghi789",
            "snippet": {
                "title": "Elevator Music for Coding",
                "channelTitle": "Lofi Beats",
                "description": "Two hours of calm"
            }
        }
    ]
