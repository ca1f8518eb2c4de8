"""
Built-in text transforms.

Text transforms fall back to the original text (or an empty string when
they generate new text); structured transforms fall back to an empty
list or a neutral object.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from ..document_io import export_plain_text
from ..model import normalize_document
from ..shared import as_dict, as_text
from .base import TextTransform
from .openai_utils import extract_json_array, extract_json_object, strip_markdown_fences

TONES = {
    "professional": "formal, direct, results-oriented and corporate",
    "creative": "engaging, original, with inspiring and dynamic vocabulary",
    "academic": "scholarly, structured, detailed and focused on technical precision",
    "enthusiastic": "energetic, passionate, confident and motivating",
}
ACTIONS = {
    "grammar": (
        "You are a strict proofreader. Fix ONLY grammar and punctuation mistakes. "
        "Keep the original style and wording as much as possible."
    ),
    "shorter": "Condense the text while keeping the key points. Reduce its length by about 30%. Be concise.",
    "longer": (
        "Expand the text with professional detail and context without inventing facts. "
        "Increase its length by about 30%."
    ),
}

MAX_RESUME_CHARS = 20000
MAX_JOB_CHARS = 5000


def _text(payload: Dict[str, Any], key: str, default: str = "") -> str:
    return as_text(payload.get(key)) or default


def _clean_text_reply(content: str) -> str:
    text = strip_markdown_fences(content)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        text = text[1:-1].strip()
    if not text:
        raise ValueError("empty reply")
    return text


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _document(payload: Dict[str, Any]) -> Dict[str, Any]:
    document = payload.get("document")
    return normalize_document(document) if isinstance(document, dict) else normalize_document({})


def _resume_text(payload: Dict[str, Any]) -> str:
    text = _text(payload, "resume_text")
    if not text and isinstance(payload.get("document"), dict):
        text = export_plain_text(_document(payload))
    return text[:MAX_RESUME_CHARS]


def _require_resume(transform: TextTransform, kwargs: Dict[str, Any]) -> None:
    if not isinstance(kwargs.get("document"), dict) and not as_text(kwargs.get("resume_text")):
        raise ValueError(f"Transform '{transform.name()}' requires either 'document' or 'resume-text'")


# ------------------------- Free-text transforms -------------------------

class RewriteTransform(TextTransform):
    """Rewrite a text fragment in a tone, or proofread/shorten/lengthen it."""

    prompt_name = "rewrite"
    required = ("text",)

    def name(self) -> str:
        return "rewrite"

    def description(self) -> str:
        return "Rewrites a text fragment in the chosen tone (or fixes grammar, shortens, lengthens)"

    def validate_params(self, **kwargs) -> None:
        super().validate_params(**kwargs)
        action = kwargs.get("action")
        if action and action not in ACTIONS:
            raise ValueError(f"Transform 'rewrite' action must be one of: {', '.join(ACTIONS)}")

    def is_noop(self, payload: Dict[str, Any]) -> bool:
        return not _text(payload, "text").strip()

    def prompt_vars(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        action = _text(payload, "action")
        if action in ACTIONS:
            instruction = ACTIONS[action]
        else:
            tone = TONES.get(_text(payload, "tone"), TONES["professional"])
            instruction = f"Rewrite the user's text to make it more impactful.\nSTYLE: {tone}."
        return {"instruction": instruction}

    def user_message(self, payload: Dict[str, Any]) -> str:
        return f'Original text (section: {_text(payload, "context", "resume")}): "{_text(payload, "text")}"'

    def parse(self, content: str) -> str:
        return _clean_text_reply(content)

    def fallback(self, payload: Dict[str, Any]) -> str:
        return _text(payload, "text")


class TranslateTransform(TextTransform):
    prompt_name = "translate"
    required = ("text", "target_language")

    def name(self) -> str:
        return "translate"

    def description(self) -> str:
        return "Translates text into a target language, keeping technical terms"

    def is_noop(self, payload: Dict[str, Any]) -> bool:
        return not _text(payload, "text").strip()

    def prompt_vars(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {"target_language": _text(payload, "target_language")}

    def user_message(self, payload: Dict[str, Any]) -> str:
        return _text(payload, "text")

    def parse(self, content: str) -> str:
        return _clean_text_reply(content)

    def fallback(self, payload: Dict[str, Any]) -> str:
        return _text(payload, "text")


class SummarizeTransform(TextTransform):
    """Write a professional summary from the target title and recent roles."""

    prompt_name = "summarize"

    def name(self) -> str:
        return "summarize"

    def description(self) -> str:
        return "Writes a short first-person professional summary"

    def validate_params(self, **kwargs) -> None:
        if not isinstance(kwargs.get("document"), dict) and not as_text(kwargs.get("job_title")):
            raise ValueError("Transform 'summarize' requires either 'document' or 'job-title'")

    def user_message(self, payload: Dict[str, Any]) -> str:
        document = _document(payload)
        info = as_dict(document.get("personalInfo"))
        job_title = _text(payload, "job_title") or as_text(info.get("jobTitle"))
        experience = payload.get("experience")
        if not isinstance(experience, list):
            experience = document.get("experience") or []
        history = ", ".join(
            " at ".join(v for v in (as_text(e.get("role")), as_text(e.get("company"))) if v)
            for e in experience[:3]
            if isinstance(e, dict)
        )
        return f"Target role: {job_title}. History: {history or 'n/a'}."

    def parse(self, content: str) -> str:
        return _clean_text_reply(content)

    def fallback(self, payload: Dict[str, Any]) -> str:
        return as_text(as_dict(_document(payload).get("personalInfo")).get("summary"))


class GenerateBulletsTransform(TextTransform):
    prompt_name = "generate_bullets"
    required = ("role",)

    def name(self) -> str:
        return "generate-bullets"

    def description(self) -> str:
        return "Drafts three achievement bullets for a role"

    def user_message(self, payload: Dict[str, Any]) -> str:
        return f'Role: "{_text(payload, "role")}", Company: "{_text(payload, "company", "General")}"'

    def parse(self, content: str) -> str:
        lines = [line.strip() for line in _clean_text_reply(content).splitlines() if line.strip()]
        return "\n".join(line if line.startswith(("•", "-")) else f"• {line}" for line in lines)

    def fallback(self, payload: Dict[str, Any]) -> str:
        return ""


class CoverLetterTransform(TextTransform):
    prompt_name = "generate_cover_letter"
    required = ("document",)

    def name(self) -> str:
        return "generate-cover-letter"

    def description(self) -> str:
        return "Drafts a cover letter for a company and position"

    def prompt_vars(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        letter = as_dict(_document(payload).get("coverLetter"))
        return {
            "company": _text(payload, "company") or as_text(letter.get("companyName")) or "the company",
            "job": _text(payload, "job") or as_text(letter.get("jobTitle")) or "the position",
        }

    def user_message(self, payload: Dict[str, Any]) -> str:
        info = as_dict(_document(payload).get("personalInfo"))
        return (
            f"Candidate: {as_text(info.get('fullName'))}, current title: {as_text(info.get('jobTitle'))}.\n"
            f"Highlights: {as_text(info.get('summary'))}"
        )

    def parse(self, content: str) -> str:
        return _clean_text_reply(content)

    def fallback(self, payload: Dict[str, Any]) -> str:
        return as_text(as_dict(_document(payload).get("coverLetter")).get("content"))


class InterviewQuestionsTransform(TextTransform):
    prompt_name = "generate_questions"
    required = ("document",)

    def name(self) -> str:
        return "generate-questions"

    def description(self) -> str:
        return "Generates five interview questions for the candidate"

    def user_message(self, payload: Dict[str, Any]) -> str:
        document = _document(payload)
        info = as_dict(document.get("personalInfo"))
        return (
            f"Target role: {as_text(info.get('jobTitle'))}.\n"
            f"Summary: {as_text(info.get('summary'))}.\n"
            f"Experience: {self.to_json(document.get('experience', [])[:2])}"
        )

    def parse(self, content: str) -> str:
        return _clean_text_reply(content)

    def fallback(self, payload: Dict[str, Any]) -> str:
        return ""


# ------------------------- Structured transforms -------------------------

class SuggestSkillsTransform(TextTransform):
    prompt_name = "suggest_skills"
    json_mode = True
    required = ("job_title",)

    def name(self) -> str:
        return "suggest-skills"

    def description(self) -> str:
        return "Suggests eight key skills for a job title"

    def user_message(self, payload: Dict[str, Any]) -> str:
        return f'Job title: "{_text(payload, "job_title")}"'

    def parse(self, content: str) -> List[str]:
        obj = extract_json_object(content)
        values = obj.get("skills") if obj is not None else extract_json_array(content)
        if not isinstance(values, list):
            raise ValueError("expected a list of skills")
        return _string_list(values)

    def fallback(self, payload: Dict[str, Any]) -> List[str]:
        return []


class AnalyzeMatchTransform(TextTransform):
    """ATS-style comparison of a resume against a job description."""

    prompt_name = "analyze_match"
    json_mode = True

    def name(self) -> str:
        return "analyze-match"

    def description(self) -> str:
        return "Scores a resume against a job description (score, feedback, missing keywords)"

    def validate_params(self, **kwargs) -> None:
        _require_resume(self, kwargs)
        if not as_text(kwargs.get("job_description")):
            raise ValueError("Transform 'analyze-match' requires parameter(s): job_description")

    def user_message(self, payload: Dict[str, Any]) -> str:
        return (
            f"RESUME:\n{_resume_text(payload)}\n\n"
            f"JOB DESCRIPTION:\n{_text(payload, 'job_description')[:MAX_JOB_CHARS]}"
        )

    def parse(self, content: str) -> Dict[str, Any]:
        obj = extract_json_object(content)
        if obj is None:
            raise ValueError("expected a JSON object")
        score = obj.get("score")
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ValueError("score must be a number")
        if not math.isfinite(score):
            raise ValueError("score must be finite")
        return {
            "score": int(min(max(round(score), 0), 100)),
            "feedback": _string_list(obj.get("feedback")),
            "missingKeywords": _string_list(obj.get("missingKeywords")),
        }

    def fallback(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {"score": 0, "feedback": [], "missingKeywords": []}


class EstimateSalaryTransform(TextTransform):
    prompt_name = "estimate_salary"
    json_mode = True
    required = ("job_title",)

    def name(self) -> str:
        return "estimate-salary"

    def description(self) -> str:
        return "Estimates a salary range for a job title and location"

    def user_message(self, payload: Dict[str, Any]) -> str:
        parts = [f"Job title: {_text(payload, 'job_title')}"]
        if _text(payload, "location"):
            parts.append(f"Location: {_text(payload, 'location')}")
        if isinstance(payload.get("document"), dict):
            parts.append(f"Resume:\n{_resume_text(payload)}")
        return "\n".join(parts)

    def parse(self, content: str) -> Dict[str, Any]:
        obj = extract_json_object(content)
        if obj is None:
            raise ValueError("expected a JSON object")
        low, high = obj.get("min"), obj.get("max")
        for value in (low, high):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError("min and max must be numbers")
            if not math.isfinite(value):
                raise ValueError("min and max must be finite")
        if low > high:
            low, high = high, low
        return {
            "min": low,
            "max": high,
            "currency": as_text(obj.get("currency")),
            "rationale": as_text(obj.get("rationale")),
        }

    def fallback(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {"min": 0, "max": 0, "currency": "", "rationale": ""}


class AnalyzeGapTransform(TextTransform):
    prompt_name = "analyze_gap"
    json_mode = True

    def name(self) -> str:
        return "analyze-gap"

    def description(self) -> str:
        return "Lists hard skills, soft skills and improvements missing for a target role"

    def validate_params(self, **kwargs) -> None:
        _require_resume(self, kwargs)
        if not as_text(kwargs.get("target_role")) and not as_text(kwargs.get("job_description")):
            raise ValueError("Transform 'analyze-gap' requires either 'target-role' or 'job-description'")

    def user_message(self, payload: Dict[str, Any]) -> str:
        target = _text(payload, "target_role") or _text(payload, "job_description")[:MAX_JOB_CHARS]
        return f"RESUME:\n{_resume_text(payload)}\n\nTARGET:\n{target}"

    def parse(self, content: str) -> Dict[str, Any]:
        obj = extract_json_object(content)
        if obj is None:
            raise ValueError("expected a JSON object")
        return {
            "missingHardSkills": _string_list(obj.get("missingHardSkills")),
            "missingSoftSkills": _string_list(obj.get("missingSoftSkills")),
            "improvements": _string_list(obj.get("improvements")),
        }

    def fallback(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {"missingHardSkills": [], "missingSoftSkills": [], "improvements": []}


class ExtractFromDocumentTransform(TextTransform):
    """Turn the text of an existing resume into a partial document."""

    prompt_name = "extract_from_document"
    json_mode = True
    required = ("text",)

    def name(self) -> str:
        return "extract-from-document"

    def description(self) -> str:
        return "Extracts a partial resume document from plain resume text"

    def is_noop(self, payload: Dict[str, Any]) -> bool:
        return not _text(payload, "text").strip()

    def user_message(self, payload: Dict[str, Any]) -> str:
        return _text(payload, "text")[:MAX_RESUME_CHARS]

    def parse(self, content: str) -> Dict[str, Any]:
        obj = extract_json_object(content)
        if obj is None:
            raise ValueError("expected a JSON object")
        return obj

    def fallback(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {}


BUILTIN_TRANSFORMS = (
    RewriteTransform,
    SummarizeTransform,
    TranslateTransform,
    SuggestSkillsTransform,
    CoverLetterTransform,
    AnalyzeMatchTransform,
    InterviewQuestionsTransform,
    EstimateSalaryTransform,
    AnalyzeGapTransform,
    ExtractFromDocumentTransform,
    GenerateBulletsTransform,
)
