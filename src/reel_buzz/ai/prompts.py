"""Prompt templates for Instagram content analysis and generation.

The ``*_PROMPT`` templates use ``str.format`` placeholders; literal JSON
braces are doubled. The ``build_*`` functions assemble the prompts the
analyzers and generators send.
"""

from collections.abc import Sequence

from reel_buzz.ai.models import (
    BuzzAnalysisOptions,
    BuzzSummary,
    CaptionOptions,
    EngagementMetrics,
    ScriptOptions,
    ThreadsOptions,
    Transcription,
)

BUZZ_ANALYSIS_PROMPT = """You are an Instagram expert analyzing content for viral potential.

Analyze the following content and metrics:
Content: {content}
Likes: {likes}
Comments: {comments}
Shares: {shares}
Views: {views}
Hashtags: {hashtags}

Provide analysis in this exact JSON format:
{{
  "buzzScore": <0-100>,
  "sentiment": "<positive|negative|neutral>",
  "virality": "<low|medium|high>",
  "targetAudience": "<description>",
  "keyThemes": [<themes>],
  "successFactors": [<factors>],
  "improvements": [<suggestions>],
  "estimatedReach": "<number>",
  "recommendedPostingTime": "<time>"
}}"""

THREADS_GENERATION_PROMPT = """You are an expert content creator specializing in Threads (Meta's Twitter alternative).

Create an engaging Threads post about: {topic}

Specifications:
- Tone: {tone}
- Style: {style}
- Each post max 280 characters
- Create 5-8 connected posts
- Make it engaging and shareable
- Include appropriate threading

Return in this exact JSON format:
{{
  "thread": [
    "post_1_text",
    "post_2_text",
    "..."
  ],
  "hashtags": ["#tag1", "#tag2"],
  "callToAction": "specific_action",
  "threadTip": "tip_for_engagement"
}}"""

REEL_SCRIPT_PROMPT = """You are a professional video content creator and scriptwriter.

Create a {duration}-second Reel script about: {topic}

Style: {style}
Target Platform: Instagram Reels
Pacing: {duration}s (roughly 1-2 sentences per 5 seconds)

Script Requirements:
- Include visual descriptions
- Add voiceover timing
- Suggest transitions
- Include on-screen text suggestions
- Music mood recommendation

Return in this exact JSON format:
{{
  "title": "reel_title",
  "script": "full_narrative_script",
  "scenes": [
    {{
      "time": "0-5s",
      "visual": "description",
      "voiceover": "what_to_say",
      "onScreenText": "optional_text",
      "transition": "type_of_transition"
    }},
    ...
  ],
  "musicMood": "upbeat|calm|energetic|inspiring",
  "musicSuggestions": ["song1", "song2"],
  "hashtags": ["#tag1", "#tag2"],
  "tips": ["engagement_tip1", "engagement_tip2"]
}}"""

CAPTION_GENERATION_PROMPT = """You are an Instagram caption expert.

Generate a caption for this Instagram post:
Topic: {topic}
Post Type: {post_type}
Tone: {tone}
Image Mood: {image_mood}

Specifications:
- Engaging and authentic
- 100-250 characters (optimal for engagement)
- Include call-to-action
- Research-backed engagement techniques
- Hook in first sentence

Return in this exact JSON format:
{{
  "caption": "main_caption_text",
  "hookLine": "first_line_grabber",
  "callToAction": "specific_action_to_take",
  "hashtags": {{"primary": ["#tag1", "#tag2"], "secondary": ["#tag3", "#tag4"]}},
  "estimatedEngagementRate": "<percentage>",
  "engagementTips": ["tip1", "tip2"],
  "postPairingSuggestions": [
    {{
      "type": "carousel_image",
      "description": "next_slide_idea"
    }}
  ]
}}"""

HASHTAG_RESEARCH_PROMPT = """You are a hashtag strategy expert for Instagram.

Analyze hashtags for: {topic}
Target Audience: {target_audience}
Current Size: {account_size}
Engagement Level: {engagement_level}

Return in this exact JSON format:
{{
  "trending": ["#trend1", "#trend2"],
  "niche": ["#niche1", "#niche2"],
  "branded": ["#brand1"],
  "strategy": {{
    "recommended": 20,
    "breakdown": {{
      "trending": 5,
      "niche": 10,
      "branded": 5
    }}
  }},
  "timing": "best_posting_time",
  "notes": "strategy_notes"
}}"""

ENGAGEMENT_ANALYSIS_PROMPT = """You are an Instagram engagement strategist.

Analyze this post's engagement:
Post Type: {post_type}
Engagement: {engagement}
Reach: {reach}
Comments: {comments}
Saves: {saves}
Shares: {shares}

Return in this exact JSON format:
{{
  "engagementRate": "<percentage>",
  "performance": "<below|average|above>_expectations",
  "strengths": ["strength1", "strength2"],
  "weaknesses": ["weakness1", "weakness2"],
  "improvements": {{
    "caption": "suggestion",
    "timing": "suggestion",
    "contentStyle": "suggestion"
  }},
  "predictedPerformance": {{
    "bestTimeToPost": "time",
    "estimatedReach": "number",
    "expectedEngagementRate": "percentage"
  }}
}}"""

AUDIENCE_ANALYSIS_PROMPT = """You are an Instagram audience analysis expert.

Analyze audience for account: {account_info}
Demographics: {demographics}
Interests: {interests}
Engagement Patterns: {engagement_patterns}

Return in this exact JSON format:
{{
  "primaryAudience": "description",
  "demographics": {{
    "ageRange": "range",
    "location": "location",
    "interests": ["interest1", "interest2"]
  }},
  "contentPreferences": [
    {{
      "type": "type",
      "preference": "high|medium|low",
      "reasoning": "why"
    }}
  ],
  "growthOpportunities": [
    {{
      "segment": "audience_segment",
      "strategy": "how_to_reach"
    }}
  ],
  "contentCalendar": {{
    "bestDays": ["monday", "wednesday"],
    "bestTimes": ["8am", "7pm"],
    "contentMix": "suggested_content_distribution"
  }}
}}"""


def _number_or_zero(value: int | float | None) -> str:
    return str(value) if value else "0"


def format_buzz_analysis_prompt(
    content: str,
    likes: int | float | None = None,
    comments: int | float | None = None,
    shares: int | float | None = None,
    views: int | float | None = None,
    hashtags: Sequence[str] | None = None,
) -> str:
    """Fill the buzz analysis template; missing metrics render as 0."""
    return BUZZ_ANALYSIS_PROMPT.format(
        content=content,
        likes=_number_or_zero(likes),
        comments=_number_or_zero(comments),
        shares=_number_or_zero(shares),
        views=_number_or_zero(views),
        hashtags=", ".join(hashtags) if hashtags else "None",
    )


def format_threads_generation_prompt(
    topic: str,
    tone: str | None = None,
    style: str | None = None,
) -> str:
    return THREADS_GENERATION_PROMPT.format(
        topic=topic,
        tone=tone or "casual",
        style=style or "storytelling",
    )


def format_reel_script_prompt(
    topic: str,
    duration: int | None = None,
    style: str | None = None,
) -> str:
    return REEL_SCRIPT_PROMPT.format(
        topic=topic,
        duration=duration or 30,
        style=style or "entertaining",
    )


def format_caption_generation_prompt(
    topic: str,
    post_type: str | None = None,
    tone: str | None = None,
    image_mood: str | None = None,
) -> str:
    return CAPTION_GENERATION_PROMPT.format(
        topic=topic,
        post_type=post_type or "feed",
        tone=tone or "casual",
        image_mood=image_mood or "engaging",
    )


def format_hashtag_research_prompt(
    topic: str,
    target_audience: str | None = None,
    account_size: str | None = None,
    engagement_level: str | None = None,
) -> str:
    return HASHTAG_RESEARCH_PROMPT.format(
        topic=topic,
        target_audience=target_audience or "general",
        account_size=account_size or "medium",
        engagement_level=engagement_level or "average",
    )


def format_engagement_analysis_prompt(
    post_type: str,
    engagement: int | float | None = None,
    reach: int | None = None,
    comments: int | None = None,
    saves: int | None = None,
    shares: int | None = None,
) -> str:
    return ENGAGEMENT_ANALYSIS_PROMPT.format(
        post_type=post_type,
        engagement=_number_or_zero(engagement),
        reach=_number_or_zero(reach),
        comments=_number_or_zero(comments),
        saves=_number_or_zero(saves),
        shares=_number_or_zero(shares),
    )


def format_audience_analysis_prompt(
    account_info: str,
    demographics: str | None = None,
    interests: Sequence[str] | None = None,
    engagement_patterns: str | None = None,
) -> str:
    return AUDIENCE_ANALYSIS_PROMPT.format(
        account_info=account_info,
        demographics=demographics or "unknown",
        interests=", ".join(interests) if interests else "unknown",
        engagement_patterns=engagement_patterns or "unknown",
    )


# --- Buzz analysis ----------------------------------------------------------


def _or_na(value: object) -> object:
    return value if value else "N/A"


def build_buzz_analysis_prompt(transcription: str, options: BuzzAnalysisOptions) -> str:
    """Build the detailed transcription analysis prompt."""
    metrics_context = ""
    if options.current_metrics is not None:
        m = options.current_metrics
        metrics_context = (
            "\nCurrent Performance Metrics:\n"
            f"- Views: {_or_na(m.views)}\n"
            f"- Likes: {_or_na(m.likes)}\n"
            f"- Comments: {_or_na(m.comments)}\n"
            f"- Shares: {_or_na(m.shares)}\n"
        )

    account_context = ""
    if options.account_info is not None:
        a = options.account_info
        account_context = (
            "\nAccount Context:\n"
            f"- Followers: {_or_na(a.follower_count)}\n"
            f"- Average Engagement Rate: {_or_na(a.avg_engagement_rate)}%\n"
            f"- Niche: {a.niche or 'General'}\n"
        )

    competitor_section = ""
    if options.include_competitor_analysis:
        competitor_section = """"competitorAnalysis": {
    "similarContentPerformance": "<analysis>",
    "differentiationFactors": ["<factor1>", "<factor2>"]
  },"""

    return f"""You are an expert Instagram Reels analyst specializing in viral content analysis for Japanese-speaking audiences.

Analyze the following Instagram Reel transcription for buzz potential and viral factors.
The content may be in Japanese or English. Provide analysis in the same language as the input content.

Content Type: {options.content_type or 'reel'}
{metrics_context}{account_context}

TRANSCRIPTION:
"{transcription}"

Provide a comprehensive analysis in the following JSON format. Return ONLY valid JSON, no additional text:

{{
  "buzzScore": <number 0-100>,
  "sentiment": "<positive|negative|neutral>",
  "viralPotential": "<low|medium|high|very-high>",
  "keyHooks": [
    {{
      "text": "<specific quote from transcription>",
      "timestamp": "<optional timestamp like '0:05'>",
      "hookType": "<emotional|curiosity|shocking|relatable|educational|humorous>",
      "strength": <number 0-10>
    }}
  ],
  "trendingTopics": [
    {{
      "topic": "<topic name>",
      "relevance": <number 0-100>,
      "trendStrength": "<emerging|trending|viral|declining>"
    }}
  ],
  "contentStructure": {{
    "openingStrength": <number 0-10>,
    "retentionFactors": ["<factor1>", "<factor2>"],
    "callToActionPresent": <boolean>,
    "pacing": "<too-slow|good|too-fast>"
  }},
  "targetAudience": {{
    "primaryDemographic": "<description>",
    "ageRange": "<age range>",
    "interests": ["<interest1>", "<interest2>"]
  }},
  "recommendations": [
    {{
      "priority": "<high|medium|low>",
      "category": "<content|timing|hashtags|engagement|editing>",
      "suggestion": "<specific actionable suggestion>",
      "expectedImpact": "<description of expected improvement>"
    }}
  ],
  {competitor_section}
  "predictedMetrics": {{
    "estimatedViews": "<range like '10K-50K'>",
    "estimatedEngagementRate": "<percentage like '5-8%'>",
    "viralityProbability": <number 0-100>
  }}
}}

ANALYSIS GUIDELINES:
1. Buzz Score Calculation:
   - 0-25: Low potential (generic, no clear hook)
   - 26-50: Moderate potential (some engaging elements)
   - 51-75: High potential (strong hooks, clear value)
   - 76-100: Very high potential (viral elements, trending topics)

2. Key Hooks:
   - Identify the most compelling phrases that grab attention
   - Rate each hook's strength (1-10)
   - Categorize the type of psychological trigger

3. Trending Topics:
   - Identify current trending themes or topics
   - Rate relevance to the content
   - Assess trend strength (emerging to declining)

4. Content Structure:
   - Opening strength: How strong is the first 3 seconds?
   - Retention factors: What keeps viewers watching?
   - CTA: Is there a clear call to action?
   - Pacing: Is the delivery speed optimal?

5. Recommendations:
   - Prioritize by expected impact (high/medium/low)
   - Provide specific, actionable suggestions
   - Focus on improvements that boost virality

Return ONLY the JSON object. No markdown formatting, no additional explanations."""


def build_quick_score_prompt(transcription: str) -> str:
    return f"""Analyze this Instagram Reel transcription and provide ONLY a buzz score (0-100).
Return ONLY a number, nothing else.

Transcription: "{transcription}"

Buzz score (0-100):"""


def build_key_hooks_prompt(transcription: str, max_hooks: int) -> str:
    return f"""Extract the top {max_hooks} most compelling hooks from this Instagram Reel transcription.
A hook is a phrase that grabs attention and encourages viewing.

Transcription: "{transcription}"

Return ONLY a JSON array in this format:
[
  {{"text": "quote", "hookType": "emotional|curiosity|shocking|relatable|educational|humorous", "strength": <1-10>}}
]"""


def build_trending_topics_prompt(transcription: str) -> str:
    return f"""Identify trending topics in this Instagram Reel transcription.
Focus on topics that are currently viral or emerging on social media.

Transcription: "{transcription}"

Return ONLY a JSON array in this format:
[
  {{"topic": "topic name", "relevance": <0-100>, "trendStrength": "emerging|trending|viral|declining"}}
]"""


def build_basic_buzz_prompt(content: str, metrics: EngagementMetrics | None = None) -> str:
    """Build the general-content analysis prompt."""
    metrics_parts: list[str] = []
    if metrics is not None:
        for name, value in metrics.model_dump().items():
            if value is not None:
                metrics_parts.append(f"{name}: {value}")
    metrics_string = ", ".join(metrics_parts) or "None provided"

    return f"""Analyze the following Instagram content for buzz potential and engagement patterns.

Content: "{content}"
Current Metrics: {metrics_string}

Provide a detailed analysis in JSON format with the following structure:
{{
  "buzzScore": <number 0-100>,
  "sentiment": "<positive|negative|neutral>",
  "keyThemes": [<list of identified themes>],
  "recommendations": [<list of actionable recommendations>],
  "analysis": "<detailed analysis text>"
}}

Return ONLY the JSON object, no additional text."""


# --- Captions ---------------------------------------------------------------

CAPTION_STYLE_GUIDELINES = {
    "storytelling": "narrative-driven with emotional arc, personal anecdotes, and relatable journey",
    "educational": "informative and value-packed, teaches something specific, actionable takeaways",
    "promotional": "sales-focused with urgency, benefits-driven, conversion-oriented",
    "conversational": "casual and friendly, like talking to a friend, relatable and authentic",
    "inspirational": "motivational and uplifting, aspirational content, empowering message",
    "humorous": "funny and entertaining, witty wordplay, lighthearted and engaging",
}


def build_caption_buzz_context(buzz: BuzzSummary) -> str:
    """Summarize a buzz analysis for the caption prompt."""
    parts = [
        f"Buzz Score: {buzz.buzz_score}/100",
        f"Sentiment: {buzz.sentiment_label}",
    ]
    if buzz.viral_potential:
        parts.append(f"Viral Potential: {buzz.viral_potential}")
    themes = buzz.theme_texts()
    if themes:
        parts.append(f"Key Themes: {', '.join(themes)}")
    key_hooks = buzz.hooks()
    if key_hooks:
        hooks = "; ".join(f'"{h.text}" ({h.hook_type})' for h in key_hooks[:3])
        parts.append(f"Top Hooks: {hooks}")
    topics = buzz.topics()
    if topics:
        parts.append(f"Trending Topics: {', '.join(t.topic for t in topics[:3])}")
    audience = buzz.audience()
    if audience:
        parts.append(f"Target Demographic: {audience.primary_demographic} ({audience.age_range})")
    recommendations = buzz.recommendation_texts()
    if recommendations:
        parts.append(f"Top Recommendations: {'; '.join(recommendations[:2])}")
    return "\n".join(parts)


def build_caption_prompt(
    transcription: Transcription,
    buzz: BuzzSummary,
    options: CaptionOptions,
) -> str:
    """Build the transcription-based Instagram caption prompt."""
    guidelines = CAPTION_STYLE_GUIDELINES.get(options.style, CAPTION_STYLE_GUIDELINES["conversational"])
    emoji_rule = (
        "- Include strategic emoji placement (3-5 emojis max)" if options.include_emojis else "- No emojis"
    )
    cta_rule = (
        "- Include a strong call-to-action"
        if options.include_call_to_action
        else "- No call-to-action needed"
    )
    optional_fields = ""
    if options.include_emojis:
        optional_fields += '"emojiSuggestions": ["😍", "✨", "🔥"],\n  '
    if options.include_posting_time:
        optional_fields += '"postingTimeSuggestion": "Best time to post based on content and audience",\n  '

    return f"""You are an expert Instagram content strategist specializing in viral Instagram Reels captions.

Create an engaging Instagram caption based on this Reel analysis:

**Original Video Transcription:**
"{transcription.text}"

**Buzz Analysis:**
{build_caption_buzz_context(buzz)}

**Caption Requirements:**
- Style: {options.style} ({guidelines})
- Maximum length: {options.max_length} characters (Instagram limit: 2,200)
- Target audience: {options.target_audience}
- Brand voice: {options.brand_voice}
- Hashtags: {options.hashtag_count} relevant hashtags (mix of trending, niche, and branded)
{emoji_rule}
{cta_rule}

**Caption Best Practices:**
1. Opening Hook: Start with an attention-grabbing first line (question, bold statement, or intrigue)
2. Value Proposition: Clearly state what viewers gain from watching
3. Storytelling: Use the transcription content to tell a compelling story
4. Emotional Connection: Leverage the sentiment and hooks from buzz analysis
5. Trending Topics: Incorporate trending topics naturally
6. Call-to-Action: Encourage engagement (like, comment, share, save)
7. Hashtag Strategy:
   - 5-7 high-volume trending hashtags (100K+ posts)
   - 10-15 medium-volume niche hashtags (10K-100K posts)
   - 5-7 low-volume specific hashtags (<10K posts)
   - Mix of topic, demographic, and trending hashtags
8. Character Limit: Stay under {options.max_length} characters
9. Readability: Use line breaks for better flow (but not in JSON)

**Return ONLY valid JSON in this exact format:**
{{
  "caption": "The complete Instagram caption text with line breaks represented as \\n",
  "hook": "The attention-grabbing opening line only",
  "hashtags": ["#hashtag1", "#hashtag2", ...{options.hashtag_count} hashtags total],
  "callToAction": "The call-to-action phrase",
  "estimatedEngagement": "low|medium|high|very-high",
  {optional_fields}"characterCount": <number>
}}

**Important:**
- The caption should be engaging from the FIRST word
- Use the key hooks identified in buzz analysis
- Make it authentic and genuine to {options.brand_voice}
- Leverage trending topics to increase discoverability
- Caption must work standalone without watching the video
- Total caption length must be under {options.max_length} characters
- Use \\n for line breaks in the caption text
- DO NOT include hashtags in the caption text - return them separately in the hashtags array"""


def build_topic_caption_prompt(topic: str, image_type: str, tone: str, include_hashtags: bool) -> str:
    hashtag_rule = "- Include 5-10 relevant hashtags" if include_hashtags else "- No hashtags needed"
    hashtag_shape = '["#hashtag1", "#hashtag2", ...]' if include_hashtags else "[]"
    return f"""Generate an Instagram caption for the following content:
Topic: "{topic}"
Image Type: {image_type}
Tone: {tone}

Requirements:
- Write an engaging caption (100-250 characters)
{hashtag_rule}
- Add a call-to-action
- Optimize for engagement
- Return ONLY in JSON format:
{{
  "caption": "the main caption text",
  "hashtags": {hashtag_shape},
  "callToAction": "engaging CTA",
  "estimatedEngagement": "<low|medium|high>"
}}"""


# --- Threads ----------------------------------------------------------------


def build_threads_prompt(
    transcription: Transcription,
    buzz: BuzzSummary,
    options: ThreadsOptions,
) -> str:
    """Build the transcription-based Threads post prompt."""
    buzz_context = "\n".join(
        [
            f"Buzz Score: {buzz.buzz_score}/100",
            f"Sentiment: {buzz.sentiment_label}",
            f"Key Themes: {', '.join(buzz.theme_texts())}",
            f"Analysis: {buzz.analysis or ''}",
            f"Top Recommendations: {'; '.join(buzz.recommendation_texts()[:3])}",
        ]
    )
    hashtag_rule = "- Include 3-5 relevant hashtags" if options.include_hashtags else "- No hashtags"
    cta_rule = (
        "- Include a call-to-action" if options.include_call_to_action else "- No call-to-action needed"
    )

    return f"""You are an expert social media content creator specializing in Threads (Meta's text-based platform).

Create an engaging Threads post based on this Instagram Reel analysis:

**Original Video Transcription:**
"{transcription.text}"

**Buzz Analysis:**
{buzz_context}

**Requirements:**
- Tone: {options.tone}
- Maximum length: {options.max_length} characters
- Target audience: {options.target_audience}
- Make it engaging and shareable
- Capture the essence of the original content
- Leverage the buzz factors identified in the analysis
{hashtag_rule}
{cta_rule}

**Return ONLY valid JSON in this exact format:**
{{
  "text": "The main Threads post text ({options.max_length} chars max)",
  "hashtags": ["#hashtag1", "#hashtag2", "#hashtag3"],
  "estimatedEngagement": "low|medium|high",
  "callToAction": "Optional engaging call-to-action"
}}

**Important:**
- Keep the post conversational and authentic
- Use the key themes from the buzz analysis
- Make sure the text is exactly what would appear in a Threads post
- The text should standalone without needing the video
- Total text length must be under {options.max_length} characters"""


def build_topic_thread_prompt(topic: str, tone: str, style: str) -> str:
    return f"""Create an engaging Threads post thread about: "{topic}"
Tone: {tone}
Style: {style}

Requirements:
- Create a 5-8 part thread
- Each part should be 280 characters or less
- Make it engaging and shareable
- Include appropriate thread structure
- Return ONLY in JSON format:
{{
  "thread": ["part1", "part2", ...],
  "hashtags": ["#hashtag1", "#hashtag2", ...],
  "callToAction": "engaging call to action"
}}"""


# --- Reel scripts -----------------------------------------------------------


def build_script_prompt(
    transcription: Transcription,
    buzz: BuzzSummary,
    options: ScriptOptions,
) -> str:
    """Build the transcription-based Reel script prompt."""
    duration = options.duration
    tone = options.tone

    hooks = buzz.hooks()
    if hooks:
        key_hooks = "\n".join(
            f"- {h.text} ({h.hook_type}, strength: {h.strength}/10)" for h in hooks[:3]
        )
    else:
        key_hooks = "None identified"

    topics = buzz.topics()
    if topics:
        trending_topics = "\n".join(
            f"- {t.topic} (relevance: {t.relevance}%)" for t in topics[:3]
        )
    else:
        trending_topics = "None identified"

    buzz_context = "\n".join(
        [
            f"Buzz Score: {buzz.buzz_score}/100",
            f"Viral Potential: {buzz.viral_potential or 'medium'}",
            f"Sentiment: {buzz.sentiment_label}",
            f"Key Themes: {', '.join(buzz.theme_texts()) or 'N/A'}",
            f"Analysis: {buzz.analysis or 'No detailed analysis available'}",
        ]
    )
    original_duration = (
        f"Original Duration: {transcription.duration:g}s" if transcription.duration else ""
    )
    subtitles = "Yes" if options.include_subtitles else "No"

    return f"""You are an expert Instagram Reels script writer specializing in viral content creation.

Create a new Reel script based on the following analysis of a successful Reel:

**ORIGINAL TRANSCRIPTION:**
"{transcription.text}"
{original_duration}

**BUZZ ANALYSIS:**
{buzz_context}

**KEY HOOKS IDENTIFIED:**
{key_hooks}

**TRENDING TOPICS:**
{trending_topics}

**TARGET SCRIPT SPECIFICATIONS:**
- Duration: {duration} seconds
- Style: {options.style}
- Tone: {tone}
- Target Audience: {options.target_audience}
- Complexity: {options.complexity}
- Include on-screen text: {subtitles}

**REQUIREMENTS:**
1. Create a NEW script inspired by the original, not a copy
2. Hook (first 3 seconds): Must grab attention immediately
3. Main content: {(duration - 8) // 5} sections of ~5 seconds each
4. Call-to-action (last 5 seconds): Clear and compelling CTA
5. Include visual descriptions and B-roll suggestions
6. Add pacing notes and emphasis markers
7. Suggest on-screen text for key moments
8. Provide music mood and tempo suggestions
9. Optimize for retention and engagement

**PACING GUIDELINES:**
- Speaking pace: ~150 words per minute for {tone} tone
- Total words for {duration}s: ~{int(duration * 2.5)} words
- First 3 seconds: Maximum impact, minimum words
- Middle sections: Maintain rhythm, vary energy
- Last 5 seconds: Punchy CTA, leave them wanting more

**Return ONLY valid JSON in this exact format:**
{{
  "title": "Catchy title for the Reel",
  "duration": {duration},
  "hook": {{
    "text": "Opening hook voiceover (max 10 words)",
    "duration": 3,
    "visualSuggestion": "Detailed visual description for first 3 seconds",
    "onScreenText": "Optional punchy text overlay"
  }},
  "sections": [
    {{
      "timestamp": "0:03-0:08",
      "duration": 5,
      "type": "main|transition",
      "voiceover": "What to say in this section",
      "visualDescription": "What the viewer sees",
      "brollSuggestion": "Optional B-roll footage idea",
      "emphasis": [
        {{"text": "word or phrase", "type": "pause|speed-up|emphasize|whisper"}}
      ],
      "onScreenText": "Optional text overlay"
    }}
  ],
  "callToAction": {{
    "text": "Final CTA voiceover",
    "duration": 5,
    "visualSuggestion": "How to end the video visually"
  }},
  "metadata": {{
    "totalWordCount": <number>,
    "estimatedPace": "X words per minute",
    "difficulty": "easy|medium|hard",
    "equipmentNeeded": ["camera", "tripod", "ring light", etc.],
    "targetAudience": "description"
  }},
  "musicSuggestion": {{
    "mood": "upbeat|calm|dramatic|energetic",
    "tempo": "slow|medium|fast",
    "genres": ["pop", "electronic", "acoustic", etc.]
  }},
  "brollList": [
    "B-roll shot 1",
    "B-roll shot 2",
    "B-roll shot 3"
  ],
  "hashtags": ["#hashtag1", "#hashtag2", "#hashtag3"],
  "caption": "Engaging Instagram caption for the Reel",
  "pacingNotes": [
    "Pacing tip 1",
    "Pacing tip 2",
    "Pacing tip 3"
  ]
}}

**CRITICAL INSTRUCTIONS:**
- Use the buzz analysis insights to maximize viral potential
- Incorporate the strongest hooks from the analysis
- Leverage trending topics where relevant
- Create a UNIQUE script, don't just reformat the original
- Ensure timing adds up to exactly {duration} seconds
- Make every second count for retention
- Return ONLY the JSON object, no markdown, no additional text"""


def build_topic_script_prompt(topic: str, duration: int, style: str) -> str:
    return f"""Create a {duration}-second Reel script about: "{topic}"
Style: {style}

Requirements:
- Script should be paced for {duration} seconds (roughly 15-20 words per 5 seconds)
- Include detailed visual descriptions
- Add voiceover suggestions where appropriate
- Return ONLY in JSON format:
{{
  "script": "full script text",
  "pacing": [
    {{"timeRange": "0-5s", "description": "visual description", "voiceover": "optional voiceover"}},
    ...
  ],
  "musicSuggestion": "type of music that would fit",
  "transitionTips": ["transition idea 1", "transition idea 2", ...]
}}"""
