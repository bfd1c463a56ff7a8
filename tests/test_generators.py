"""Tests for the caption, Threads and Reel script generators."""

import pytest

from reel_buzz.ai.caption_generator import (
    CaptionGenerator,
    calculate_optimal_posting_time,
    extract_hashtags,
    format_instagram_caption,
    parse_caption_response,
    validate_instagram_caption,
)
from reel_buzz.ai.models import (
    BuzzSummary,
    CaptionOptions,
    InstagramCaption,
    ScriptOptions,
    TargetAudience,
    ThreadsOptions,
    ThreadsPost,
    Transcription,
)
from reel_buzz.ai.script_generator import (
    ScriptGenerator,
    expected_word_count,
    format_script,
    parse_script_response,
    validate_script,
)
from reel_buzz.ai.threads_generator import (
    ThreadsGenerator,
    format_threads_post,
    validate_threads_post,
)
from reel_buzz.errors import GenerationError


@pytest.fixture
def transcription():
    return Transcription(text="Here are three habits that changed my mornings", duration=42)


@pytest.fixture
def buzz():
    return BuzzSummary(
        buzz_score=82,
        sentiment="positive",
        key_themes=["habits", "mornings"],
        recommendations=["Post at 7am"],
        analysis="Strong relatable hook",
    )


@pytest.fixture
def script_payload():
    return {
        "title": "Morning Habits",
        "duration": 30,
        "hook": {"text": "Stop scrolling!", "visualSuggestion": "Close-up"},
        "sections": [
            {"timestamp": "0:03-0:10", "duration": 7, "voiceover": "Habit one", "emphasis": [{"text": "one"}]},
            {"timestamp": "0:10-0:25", "duration": 15, "voiceover": "Habit two and three"},
        ],
        "callToAction": {"text": "Follow for more", "duration": 5},
        "metadata": {"totalWordCount": 75, "difficulty": "easy"},
        "musicSuggestion": {"mood": "chill", "tempo": "slow", "genres": ["lofi"]},
        "brollList": ["coffee pour"],
        "hashtags": ["#morning"],
        "caption": "Try these!",
    }


# --- Captions ---------------------------------------------------------------


class TestCaptionHelpers:
    def test_parse_caption_adds_hash_prefix(self):
        caption = parse_caption_response(
            '{"caption": "Hello", "hook": "Hi", "hashtags": ["coffee", "#latte"], '
            '"estimatedEngagement": "viral"}',
            "storytelling",
        )
        assert caption.hashtags == ["#coffee", "#latte"]
        assert caption.character_count == 5
        assert caption.hashtag_count == 2
        assert caption.estimated_engagement == "medium"
        assert caption.style == "storytelling"

    def test_parse_caption_requires_hook(self):
        with pytest.raises(GenerationError, match="Missing or invalid hook field"):
            parse_caption_response('{"caption": "Hello", "hashtags": []}', "conversational")

    def test_format_caption(self):
        caption = InstagramCaption(
            caption="Hello", hook="Hi", hashtags=["#a", "#b"], character_count=5, hashtag_count=2,
            style="conversational",
        )
        assert format_instagram_caption(caption) == "Hello\n\n#a #b"
        assert format_instagram_caption(caption, hashtags_on_new_line=False) == "Hello #a #b"

    def test_validate_caption(self):
        caption = InstagramCaption(
            caption="Hello", hook="", hashtags=["#ok", "bad tag"], character_count=4, hashtag_count=2,
            style="conversational",
        )
        result = validate_instagram_caption(caption)
        assert result.valid is False
        assert "Character count mismatch" in result.errors
        assert "Hashtag 2 missing '#' prefix" in result.errors
        assert "Hashtag 2 contains spaces" in result.errors
        assert "No opening hook provided" in result.warnings
        assert any("Consider using more hashtags" in w for w in result.warnings)

    def test_extract_hashtags(self):
        assert extract_hashtags("Love #coffee and #tea_time!") == ["#coffee", "#tea_time"]

    def test_posting_time_by_demographic(self, buzz):
        assert "peak Instagram" in calculate_optimal_posting_time(buzz)
        buzz.target_audience = TargetAudience(primary_demographic="Busy Parents")
        assert "kids' bedtime" in calculate_optimal_posting_time(buzz)


class TestCaptionGenerator:
    @pytest.mark.asyncio
    async def test_generate_truncates_to_max_length(self, mock_model, model_json, transcription, buzz):
        mock_model.generate.return_value = model_json(
            {"caption": "x" * 120, "hook": "Wow", "hashtags": ["#a"] * 10, "callToAction": "Save it"}
        )
        caption = await CaptionGenerator(model=mock_model).generate_instagram_caption(
            transcription, buzz, CaptionOptions(max_length=100, hashtag_count=10)
        )
        assert len(caption.caption) == 100
        assert caption.caption.endswith("...")
        assert caption.character_count == 100
        assert mock_model.generate.call_args.kwargs["temperature"] == 0.8

    @pytest.mark.asyncio
    async def test_rejects_bad_options(self, mock_model, transcription, buzz):
        generator = CaptionGenerator(model=mock_model)
        with pytest.raises(ValueError, match="2,200"):
            await generator.generate_instagram_caption(transcription, buzz, CaptionOptions(max_length=3000))
        with pytest.raises(ValueError, match="between 10 and 30"):
            await generator.generate_instagram_caption(transcription, buzz, CaptionOptions(hashtag_count=5))

    @pytest.mark.asyncio
    async def test_generate_wraps_failures(self, mock_model, transcription, buzz):
        mock_model.generate.return_value = "no json"
        with pytest.raises(GenerationError, match="Failed to generate Instagram caption"):
            await CaptionGenerator(model=mock_model).generate_instagram_caption(transcription, buzz)

    @pytest.mark.asyncio
    async def test_variations_use_styles_in_order(self, mock_model, model_json, transcription, buzz):
        mock_model.generate.return_value = model_json(
            {"caption": "Hi", "hook": "Hi", "hashtags": []}
        )
        variations = await CaptionGenerator(model=mock_model).generate_caption_variations(
            transcription, buzz, count=2
        )
        assert [v.style for v in variations] == ["conversational", "storytelling"]

    @pytest.mark.asyncio
    async def test_variation_count_bounds(self, mock_model, transcription, buzz):
        with pytest.raises(ValueError):
            await CaptionGenerator(model=mock_model).generate_caption_variations(
                transcription, buzz, count=4
            )

    @pytest.mark.asyncio
    async def test_generate_from_topic(self, mock_model, model_json):
        mock_model.generate.return_value = model_json(
            {"caption": "Fresh brew", "hashtags": ["#coffee"], "callToAction": "Tag a friend",
             "estimatedEngagement": "high"}
        )
        result = await CaptionGenerator(model=mock_model).generate_from_topic("coffee", "carousel")
        assert result.caption == "Fresh brew"
        assert result.call_to_action == "Tag a friend"
        assert "Image Type: carousel" in mock_model.generate.call_args.args[0]

    @pytest.mark.asyncio
    async def test_generate_from_topic_parse_failure(self, mock_model):
        mock_model.generate.return_value = "sorry"
        with pytest.raises(GenerationError, match="Failed to parse caption generation response"):
            await CaptionGenerator(model=mock_model).generate_from_topic("coffee")


# --- Threads ----------------------------------------------------------------


class TestThreadsHelpers:
    def test_format_post(self):
        post = ThreadsPost(
            text="Hello", hashtags=["#a"], character_count=5, tone="casual", call_to_action="Reply!"
        )
        assert format_threads_post(post) == "Hello\n\n#a\n\nReply!"

    def test_validate_post(self):
        post = ThreadsPost(text="x" * 501, hashtags=["nohash"], character_count=501, tone="casual")
        result = validate_threads_post(post)
        assert result.valid is False
        assert "Post text exceeds 500 characters (501)" in result.errors
        assert "Hashtag 1 missing '#' prefix" in result.errors
        assert result.warnings is None


class TestThreadsGenerator:
    @pytest.mark.asyncio
    async def test_generate_post(self, mock_model, model_json, transcription, buzz):
        mock_model.generate.return_value = model_json(
            {
                "text": "Mornings matter.",
                "hashtags": ["#1", "#2", "#3", "#4", "#5", "#6"],
                "estimatedEngagement": "high",
                "callToAction": "What's your habit?",
            }
        )
        post = await ThreadsGenerator(model=mock_model).generate_threads_post(
            transcription, buzz, ThreadsOptions(tone="funny")
        )
        assert post.text == "Mornings matter."
        assert len(post.hashtags) == 5
        assert post.tone == "funny"
        assert post.character_count == len("Mornings matter.")
        assert post.call_to_action == "What's your habit?"

    @pytest.mark.asyncio
    async def test_options_strip_hashtags_and_cta(self, mock_model, model_json, transcription, buzz):
        mock_model.generate.return_value = model_json(
            {"text": "x" * 50, "hashtags": ["#a"], "callToAction": "Go"}
        )
        post = await ThreadsGenerator(model=mock_model).generate_threads_post(
            transcription,
            buzz,
            ThreadsOptions(max_length=20, include_hashtags=False, include_call_to_action=False),
        )
        assert post.text == "x" * 17 + "..."
        assert post.hashtags == []
        assert post.call_to_action is None

    @pytest.mark.asyncio
    async def test_missing_json(self, mock_model, transcription, buzz):
        mock_model.generate.return_value = "plain text"
        with pytest.raises(GenerationError, match="Failed to generate Threads post: No JSON found in AI response"):
            await ThreadsGenerator(model=mock_model).generate_threads_post(transcription, buzz)

    @pytest.mark.asyncio
    async def test_variation_tones(self, mock_model, model_json, transcription, buzz):
        mock_model.generate.return_value = model_json({"text": "Hi"})
        posts = await ThreadsGenerator(model=mock_model).generate_threads_variations(
            transcription, buzz, count=3
        )
        assert [p.tone for p in posts] == ["casual", "professional", "inspirational"]

    @pytest.mark.asyncio
    async def test_variation_count_bounds(self, mock_model, transcription, buzz):
        with pytest.raises(ValueError, match="Count must be between 1 and 3"):
            await ThreadsGenerator(model=mock_model).generate_threads_variations(
                transcription, buzz, count=0
            )

    @pytest.mark.asyncio
    async def test_generate_from_topic(self, mock_model, model_json):
        mock_model.generate.return_value = model_json(
            {"thread": ["one", "two"], "hashtags": ["#x"], "callToAction": "Follow"}
        )
        thread = await ThreadsGenerator(model=mock_model).generate_from_topic("AI", style="quick-tips")
        assert thread.thread == ["one", "two"]
        assert "Style: quick-tips" in mock_model.generate.call_args.args[0]


# --- Scripts ----------------------------------------------------------------


class TestScriptHelpers:
    def test_expected_word_count(self):
        assert expected_word_count(30) == 75
        assert expected_word_count(15) == 37

    def test_parse_fills_defaults(self, script_payload, model_json):
        script = parse_script_response(model_json(script_payload), 30)
        assert script.hook.duration == 3
        assert script.sections[1].type == "main"
        assert script.sections[1].visual_description == "Visual content"
        assert script.sections[0].emphasis[0].type == "emphasize"
        assert script.call_to_action.visual_suggestion == "Strong closing visual"
        assert script.metadata.estimated_pace == "150 words per minute"
        assert script.metadata.equipment_needed == ["smartphone camera"]
        assert script.music_suggestion.tempo == "slow"

    def test_parse_uses_requested_duration(self, script_payload, model_json):
        del script_payload["duration"]
        assert parse_script_response(model_json(script_payload), 60).duration == 60

    def test_parse_requires_sections(self, script_payload, model_json):
        script_payload["sections"] = []
        with pytest.raises(GenerationError, match="Missing or invalid sections"):
            parse_script_response(model_json(script_payload), 30)

    def test_format_script(self, script_payload, model_json):
        text = format_script(parse_script_response(model_json(script_payload), 30))
        assert text.startswith("# Morning Habits\n")
        assert "### Section 1 (0:03-0:10)" in text
        assert "**Emphasis:** one (emphasize)" in text
        assert "## B-Roll Shots Needed\n1. coffee pour" in text
        assert "## Call to Action (Last 5s)" in text
        assert text.endswith("1. smartphone camera\n")

    def test_validate_timing(self, script_payload, model_json):
        script = parse_script_response(model_json(script_payload), 30)
        assert validate_script(script).valid is True

        script.sections[1].duration = 30
        result = validate_script(script)
        assert result.valid is False
        assert "doesn't match script duration" in result.errors[0]

    def test_validate_word_count_warning(self, script_payload, model_json):
        script_payload["metadata"]["totalWordCount"] = 0
        result = validate_script(parse_script_response(model_json(script_payload), 30))
        assert "Word count is 0, script may be incomplete" in result.warnings


class TestScriptGenerator:
    @pytest.mark.asyncio
    async def test_generate(self, mock_model, model_json, transcription, buzz, script_payload):
        mock_model.generate.return_value = model_json(script_payload)
        script = await ScriptGenerator(model=mock_model).generate_reel_script(
            transcription, buzz, ScriptOptions(duration=30, style="tutorial")
        )
        assert script.title == "Morning Habits"
        kwargs = mock_model.generate.call_args.kwargs
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 8192

    @pytest.mark.asyncio
    async def test_requires_transcription(self, mock_model, buzz):
        with pytest.raises(ValueError, match="Transcription text is required"):
            await ScriptGenerator(model=mock_model).generate_reel_script(
                Transcription(text="  "), buzz
            )

    @pytest.mark.asyncio
    async def test_wraps_failures(self, mock_model, transcription, buzz):
        mock_model.generate.return_value = '{"title": "x"}'
        with pytest.raises(GenerationError, match="Failed to generate Reel script"):
            await ScriptGenerator(model=mock_model).generate_reel_script(transcription, buzz)

    @pytest.mark.asyncio
    async def test_variation_styles(self, mock_model, model_json, transcription, buzz, script_payload):
        mock_model.generate.return_value = model_json(script_payload)
        scripts = await ScriptGenerator(model=mock_model).generate_script_variations(
            transcription, buzz, count=2
        )
        assert len(scripts) == 2
        prompts_sent = [c.args[0] for c in mock_model.generate.call_args_list]
        assert "Style: entertaining" in prompts_sent[0]
        assert "Style: educational" in prompts_sent[1]

    @pytest.mark.asyncio
    async def test_generate_from_topic(self, mock_model, model_json):
        mock_model.generate.return_value = model_json(
            {
                "script": "Open with coffee. Then talk.",
                "pacing": [{"timeRange": "0-5s", "description": "Pour shot"}],
                "musicSuggestion": "lofi",
                "transitionTips": ["whip pan"],
            }
        )
        result = await ScriptGenerator(model=mock_model).generate_from_topic("coffee", 15)
        assert result.pacing[0].time_range == "0-5s"
        assert result.music_suggestion == "lofi"
