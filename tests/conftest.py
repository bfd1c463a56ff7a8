"""Shared fixtures."""

import json
from unittest.mock import AsyncMock

import pytest

from reel_buzz.config.settings import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached process-wide; reset them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_model():
    """Text model whose ``generate`` returns whatever the test sets."""
    model = AsyncMock()
    model.generate.return_value = ""
    return model


def _as_model_output(payload) -> str:
    return f"Here is the result:\n```json\n{json.dumps(payload, ensure_ascii=False)}\n```"


@pytest.fixture
def model_json():
    """Wrap a payload the way models tend to answer: prose plus a JSON block."""
    return _as_model_output


@pytest.fixture
def full_analysis_payload():
    return {
        "buzzScore": 78,
        "sentiment": "positive",
        "viralPotential": "high",
        "keyHooks": [
            {"text": "You won't believe this", "hookType": "curiosity", "strength": 9},
            {"text": "I cried", "hookType": "emotional", "strength": 7},
        ],
        "trendingTopics": [
            {"topic": "productivity", "relevance": 80, "trendStrength": "trending"},
            {"topic": "morning routine", "relevance": 65, "trendStrength": "viral"},
        ],
        "contentStructure": {
            "openingStrength": 8,
            "retentionFactors": ["fast cuts"],
            "callToActionPresent": True,
            "pacing": "fast",
        },
        "targetAudience": {
            "primaryDemographic": "Young professionals",
            "ageRange": "22-35",
            "interests": ["productivity"],
        },
        "recommendations": [
            {"priority": "high", "category": "hook", "suggestion": "Shorten the intro", "expectedImpact": "+10%"},
            {"priority": "low", "category": "cta", "suggestion": "Add a CTA", "expectedImpact": "+2%"},
            {"priority": "medium", "category": "pacing", "suggestion": "Cut pauses", "expectedImpact": "+5%"},
        ],
        "predictedMetrics": {
            "estimatedViews": "10K-50K",
            "estimatedEngagementRate": "6%",
            "viralityProbability": 60,
        },
    }
