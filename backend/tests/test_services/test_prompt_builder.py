"""Tests for prompt construction."""
from types import SimpleNamespace

from blogai.schemas.common import ContentType, LengthPreference, RewriteInstruction, Section, Tone
from blogai.services.prompt_builder import (
    GenerationParams,
    build_blog_prompt,
    build_keyword_prompt,
    build_rewrite_prompt,
    section_instructions,
)


def _params(**overrides):
    values = dict(
        topic="Remote work",
        tone=Tone.PROFESSIONAL,
        content_type=ContentType.HOW_TO_GUIDE,
        length_preference=LengthPreference.MEDIUM,
        target_audience=("beginners", "managers"),
        sections=(Section.INTRODUCTION, Section.CONCLUSION),
    )
    values.update(overrides)
    return GenerationParams(**values)


class TestBlogPrompt:
    def test_length_budgets(self):
        assert build_blog_prompt(_params(length_preference=LengthPreference.SHORT)).max_tokens == 1024
        assert build_blog_prompt(_params(length_preference=LengthPreference.MEDIUM)).max_tokens == 2048
        assert build_blog_prompt(_params(length_preference=LengthPreference.LONG)).max_tokens == 4096

    def test_system_prompt_contents(self):
        spec = build_blog_prompt(_params())
        assert 'Write a how-to guide about "Remote work"' in spec.system
        assert "Target audience: beginners, managers" in spec.system
        assert "Length: 800-1200 words" in spec.system
        assert "- Include an engaging introduction" in spec.system
        assert "- End with a strong conclusion" in spec.system
        assert "FAQ" not in spec.system
        assert spec.prompt == "Write a comprehensive blog post about: Remote work"

    def test_empty_audience_defaults(self):
        spec = build_blog_prompt(_params(target_audience=()))
        assert "Target audience: beginners" in spec.system

    def test_temperature_passed_through(self):
        assert build_blog_prompt(_params(), temperature=0.2).temperature == 0.2


class TestSectionInstructions:
    def test_canonical_order(self):
        lines = section_instructions([Section.FAQ_SECTION, Section.INTRODUCTION])
        assert lines == ["Include an engaging introduction", "Add a FAQ section at the end"]

    def test_none_requested(self):
        assert section_instructions([]) == []


class TestAssistPrompts:
    def test_rewrite_prompt(self):
        spec = build_rewrite_prompt("Some text", RewriteInstruction.SIMPLIFY, Tone.FRIENDLY)
        assert "Simplify this text" in spec.prompt
        assert "Tone: friendly" in spec.prompt
        assert spec.prompt.endswith("Provide only the rewritten text, no explanations.")

    def test_keyword_prompt(self):
        spec = build_keyword_prompt("abc" * 1000, 7, content_limit=10)
        assert "top 7" in spec.prompt
        assert spec.prompt.endswith("abcabcabca")
        assert spec.temperature == 0.3


class TestGenerationParams:
    def test_from_job_row(self):
        job = SimpleNamespace(
            topic="Remote work",
            tone="casual",
            content_type="listicle",
            length_preference="short",
            target_audience=["devs"],
            sections=["faq_section"],
        )
        params = GenerationParams.from_job(job)
        assert params.tone is Tone.CASUAL
        assert params.sections == (Section.FAQ_SECTION,)
        assert params.target_audience == ("devs",)
