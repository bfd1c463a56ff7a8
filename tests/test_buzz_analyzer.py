"""Tests for the buzz analyzer."""

import pytest

from reel_buzz.ai.buzz_analyzer import (
    BuzzAnalyzer,
    parse_buzz_analysis,
    to_simplified_format,
)
from reel_buzz.ai.models import BuzzAnalysisOptions, EngagementMetrics
from reel_buzz.errors import GenerationError

class TestParseBuzzAnalysis:
    def test_full_payload(self, full_analysis_payload, model_json):
        analysis = parse_buzz_analysis(model_json(full_analysis_payload))
        assert analysis.buzz_score == 78
        assert analysis.viral_potential == "high"
        assert analysis.key_hooks[0].hook_type == "curiosity"
        assert analysis.target_audience.age_range == "22-35"
        assert analysis.predicted_metrics.virality_probability == 60

    def test_defaults_and_clamping(self):
        analysis = parse_buzz_analysis('{"buzzScore": 140}')
        assert analysis.buzz_score == 100
        assert analysis.sentiment == "neutral"
        assert analysis.viral_potential == "medium"
        assert analysis.key_hooks == []
        assert analysis.content_structure.opening_strength == 5
        assert analysis.target_audience.primary_demographic == "General audience"
        assert analysis.predicted_metrics.estimated_views == "N/A"
        assert analysis.competitor_analysis is None

    def test_missing_score(self):
        with pytest.raises(GenerationError, match="Failed to parse buzz analysis response"):
            parse_buzz_analysis('{"sentiment": "positive"}')

    def test_string_score_rejected(self):
        with pytest.raises(GenerationError):
            parse_buzz_analysis('{"buzzScore": "80"}')


class TestSimplifiedFormat:
    def test_localized_factors_and_filtered_recommendations(self, full_analysis_payload, model_json):
        analysis = parse_buzz_analysis(model_json(full_analysis_payload))
        simplified = to_simplified_format(analysis)

        assert simplified.buzz_score == 78
        assert simplified.factors == ["好奇心を刺激", "感情的なフック"]
        assert simplified.key_themes == ["productivity", "morning routine"]
        assert simplified.recommendations == ["Shorten the intro", "Cut pauses"]

    def test_unknown_hook_type_kept(self):
        analysis = parse_buzz_analysis(
            '{"buzzScore": 50, "keyHooks": [{"text": "x", "hookType": "mystery"}]}'
        )
        assert to_simplified_format(analysis).factors == ["mystery"]


class TestBuzzAnalyzer:
    @pytest.mark.asyncio
    async def test_analyze_buzz_potential(self, mock_model, full_analysis_payload, model_json):
        mock_model.generate.return_value = model_json(full_analysis_payload)
        analyzer = BuzzAnalyzer(model=mock_model)

        analysis = await analyzer.analyze_buzz_potential(
            "You won't believe this",
            BuzzAnalysisOptions(content_type="reel", include_competitor_analysis=True),
        )

        assert analysis.buzz_score == 78
        kwargs = mock_model.generate.call_args.kwargs
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 4096

    @pytest.mark.asyncio
    async def test_empty_transcription(self, mock_model):
        with pytest.raises(ValueError, match="cannot be empty"):
            await BuzzAnalyzer(model=mock_model).analyze_buzz_potential("   ")
        mock_model.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_transcription_too_long(self, mock_model):
        with pytest.raises(ValueError, match="too long"):
            await BuzzAnalyzer(model=mock_model).analyze_buzz_potential("a" * 10001)

    @pytest.mark.asyncio
    async def test_model_failure_wrapped(self, mock_model):
        mock_model.generate.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(GenerationError, match="Buzz analysis failed: quota exceeded"):
            await BuzzAnalyzer(model=mock_model).analyze_buzz_potential("hello")

    @pytest.mark.asyncio
    async def test_quick_score(self, mock_model):
        mock_model.generate.return_value = " 87\n"
        assert await BuzzAnalyzer(model=mock_model).quick_buzz_score("hello") == 87

    @pytest.mark.asyncio
    async def test_quick_score_clamped(self, mock_model):
        mock_model.generate.return_value = "250 points"
        assert await BuzzAnalyzer(model=mock_model).quick_buzz_score("hello") == 100

    @pytest.mark.asyncio
    async def test_quick_score_invalid(self, mock_model):
        mock_model.generate.return_value = "about eighty"
        with pytest.raises(GenerationError, match="Quick buzz score failed: Invalid score returned"):
            await BuzzAnalyzer(model=mock_model).quick_buzz_score("hello")

    @pytest.mark.asyncio
    async def test_extract_key_hooks_limited(self, mock_model, model_json):
        hooks = [{"text": f"hook {i}", "hookType": "curiosity", "strength": 5} for i in range(6)]
        mock_model.generate.return_value = model_json(hooks)

        result = await BuzzAnalyzer(model=mock_model).extract_key_hooks("hello", max_hooks=3)
        assert [h.text for h in result] == ["hook 0", "hook 1", "hook 2"]

    @pytest.mark.asyncio
    async def test_extract_key_hooks_failure(self, mock_model):
        mock_model.generate.return_value = "no hooks"
        with pytest.raises(GenerationError, match="Hook extraction failed"):
            await BuzzAnalyzer(model=mock_model).extract_key_hooks("hello")

    @pytest.mark.asyncio
    async def test_identify_trending_topics(self, mock_model, model_json):
        mock_model.generate.return_value = model_json(
            [{"topic": "AI", "relevance": 90, "trendStrength": "viral"}]
        )
        topics = await BuzzAnalyzer(model=mock_model).identify_trending_topics("hello")
        assert topics[0].topic == "AI"
        assert topics[0].trend_strength == "viral"

    @pytest.mark.asyncio
    async def test_analyze_transcript_simplified(self, mock_model, full_analysis_payload, model_json):
        mock_model.generate.return_value = model_json(full_analysis_payload)
        result = await BuzzAnalyzer(model=mock_model).analyze_transcript_simplified("hello", "story")
        assert result.to_dict()["keyThemes"] == ["productivity", "morning routine"]

    @pytest.mark.asyncio
    async def test_analyze_basic(self, mock_model, model_json):
        mock_model.generate.return_value = model_json(
            {"buzzScore": 64.5, "sentiment": "positive", "keyThemes": ["coffee"], "analysis": "Solid"}
        )
        result = await BuzzAnalyzer(model=mock_model).analyze_basic(
            "New coffee blend", EngagementMetrics(likes=10)
        )
        assert result.buzz_score == 64.5
        assert result.recommendations == []
        assert "likes: 10" in mock_model.generate.call_args.args[0]

    @pytest.mark.asyncio
    async def test_analyze_basic_without_json(self, mock_model):
        mock_model.generate.return_value = "I think it is great"
        with pytest.raises(GenerationError, match="Could not extract JSON from response"):
            await BuzzAnalyzer(model=mock_model).analyze_basic("content")
