import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent))

from models import Claim, Evidence  # noqa: E402

BASE_TIME = datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)


@pytest.fixture
def base_time():
    return BASE_TIME


@pytest.fixture
def claim():
    """Claim as produced by upstream extraction."""
    return Claim(
        id="claim-1",
        text="A house fire in Mumbai killed five people.",
        entity_type="event",
    )


@pytest.fixture
def make_evidence():
    """Factory for Evidence at an offset from BASE_TIME."""
    counter = {"n": 0}

    def _make(source_type="major_news", verdict="true", score=0.8,
              offset=timedelta(0), source=None, **extra):
        counter["n"] += 1
        return Evidence(
            source=source or f"{source_type} source {counter['n']}",
            source_type=source_type,
            timestamp=BASE_TIME + offset,
            verdict=verdict,
            confidence_score=score,
            **extra,
        )

    return _make


@pytest.fixture
def raw_evidence():
    """Raw retrieval records for the Mumbai fire claim."""
    return [
        {
            "source": "@mumbai_watch",
            "source_type": "Social Media",
            "timestamp": "2024-03-01T20:30:00Z",
            "verdict": "TRUE",
            "confidence_score": 0.7,
            "summary": "Five dead in Andheri fire, says eyewitness",
        },
        {
            "source": "Times of Mumbai",
            "source_type": "major_news",
            "timestamp": "2024-03-01T23:00:00Z",
            "verdict": "partially-true",
            "confidence_score": 0.6,
        },
        {
            "source": "Mumbai Fire Brigade",
            "source_type": "official",
            "timestamp": "2024-03-03T09:00:00Z",
            "verdict": "false",
            "confidence_score": 0.9,
            "title": "Casualty update",
            "summary": "Three fatalities confirmed, two injured.",
        },
    ]


@pytest.fixture
def test_client():
    """Create a TestClient for FastAPI app."""
    import main
    return TestClient(main.app)
