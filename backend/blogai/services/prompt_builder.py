"""Prompt construction — turns validated job parameters into a ``PromptSpec``.

The mapping from options to instructions lives in the configuration
records below rather than in string concatenation at call sites:

  - ``LENGTH_PROFILES``: length preference → word target + output budget
  - ``SECTION_INSTRUCTIONS``: requested section → advisory instruction
  - ``REWRITE_INSTRUCTIONS``: inline-edit verb → full instruction

Section instructions are advisory; nothing checks the model's output
against them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from blogai.schemas.common import (
    ContentType,
    LengthPreference,
    RewriteInstruction,
    Section,
    Tone,
)


@dataclass(frozen=True)
class LengthProfile:
    words: str
    max_tokens: int


@dataclass(frozen=True)
class PromptSpec:
    """Everything the remote call needs, independent of provider."""
    system: str | None
    prompt: str
    max_tokens: int
    temperature: float


@dataclass(frozen=True)
class GenerationParams:
    """Immutable parameter set of one job, as the invoker sees it."""
    topic: str
    tone: Tone
    content_type: ContentType
    length_preference: LengthPreference
    target_audience: tuple[str, ...]
    sections: tuple[Section, ...]

    @classmethod
    def from_job(cls, job) -> "GenerationParams":
        return cls(
            topic=job.topic,
            tone=Tone(job.tone),
            content_type=ContentType(job.content_type),
            length_preference=LengthPreference(job.length_preference),
            target_audience=tuple(job.target_audience or ()),
            sections=tuple(Section(s) for s in (job.sections or ())),
        )


LENGTH_PROFILES: dict[LengthPreference, LengthProfile] = {
    LengthPreference.SHORT: LengthProfile(words="300-500 words", max_tokens=1024),
    LengthPreference.MEDIUM: LengthProfile(words="800-1200 words", max_tokens=2048),
    LengthPreference.LONG: LengthProfile(words="2000+ words", max_tokens=4096),
}

# Ordered as they should appear in the requirements list
SECTION_INSTRUCTIONS: dict[Section, str] = {
    Section.INTRODUCTION: "Include an engaging introduction",
    Section.BULLET_POINTS: "Use bullet points where appropriate",
    Section.CONCLUSION: "End with a strong conclusion",
    Section.CALL_TO_ACTION: "Include a call-to-action",
    Section.FAQ_SECTION: "Add a FAQ section at the end",
}

REWRITE_INSTRUCTIONS: dict[RewriteInstruction, str] = {
    RewriteInstruction.REWRITE: "Rewrite this text to be more engaging while keeping the same meaning",
    RewriteInstruction.EXPAND: "Expand on this text with more detail and examples",
    RewriteInstruction.SHORTEN: "Make this text more concise without losing key information",
    RewriteInstruction.SIMPLIFY: "Simplify this text to make it easier to understand",
}

DEFAULT_AUDIENCE = "beginners"


def section_instructions(sections: Iterable[Section]) -> list[str]:
    requested = set(sections)
    return [text for section, text in SECTION_INSTRUCTIONS.items() if section in requested]


def build_blog_prompt(params: GenerationParams, temperature: float = 0.7) -> PromptSpec:
    """Build the system/user prompt pair for one blog post."""
    profile = LENGTH_PROFILES[params.length_preference]
    audience = ", ".join(params.target_audience) or DEFAULT_AUDIENCE
    kind = params.content_type.value.replace("_", " ")

    lines = [
        f'You are an expert content writer. Write a {kind} about "{params.topic}".',
        "",
        f"Tone: {params.tone.value}",
        f"Target audience: {audience}",
        f"Length: {profile.words}",
        "",
        "Requirements:",
        "- Write in markdown format",
        "- Use proper headings (H1 for title, H2 for sections)",
    ]
    lines.extend(f"- {text}" for text in section_instructions(params.sections))
    lines.append("")
    lines.append(
        "Make the content engaging, informative, and well-structured. "
        "Use examples where appropriate."
    )

    return PromptSpec(
        system="\n".join(lines),
        prompt=f"Write a comprehensive blog post about: {params.topic}",
        max_tokens=profile.max_tokens,
        temperature=temperature,
    )


def build_rewrite_prompt(
    text: str,
    instruction: RewriteInstruction,
    tone: Tone,
    max_tokens: int = 2048,
    temperature: float = 0.7,
) -> PromptSpec:
    prompt = (
        f"Rewrite the following text with these instructions: {REWRITE_INSTRUCTIONS[instruction]}\n\n"
        f"Tone: {tone.value}\n\n"
        f"Text to rewrite:\n{text}\n\n"
        "Provide only the rewritten text, no explanations."
    )
    return PromptSpec(system=None, prompt=prompt, max_tokens=max_tokens, temperature=temperature)


def build_keyword_prompt(
    content: str,
    count: int,
    content_limit: int = 2000,
    max_tokens: int = 512,
    temperature: float = 0.3,
) -> PromptSpec:
    prompt = (
        f"Extract the top {count} most relevant SEO keywords from the following content. "
        "Return only a comma-separated list of keywords, nothing else.\n\n"
        f"Content:\n{content[:content_limit]}"
    )
    return PromptSpec(system=None, prompt=prompt, max_tokens=max_tokens, temperature=temperature)
