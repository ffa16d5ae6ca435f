"""Fixed instruction templates wrapped around the selected text."""

from __future__ import annotations

from typing import Dict

SUMMARY_LABEL = "📝 Summary:\n"

_PROMPTS: Dict[str, str] = {
    "enhance": (
        "Please enhance the following text while maintaining its core meaning. "
        "Make it more professional and engaging: \"{text}\""
    ),
    "summarize": "Please provide a concise summary of the following text: \"{text}\"",
    "fix_grammar": "Please fix any grammar and style issues in the following text: \"{text}\"",
}


def _fill(kind: str, text: str) -> str:
    # plain replace: the selected text may itself contain braces
    return _PROMPTS[kind].replace("{text}", text)


def enhance_prompt(text: str) -> str:
    return _fill("enhance", text)


def summarize_prompt(text: str) -> str:
    return _fill("summarize", text)


def fix_grammar_prompt(text: str) -> str:
    return _fill("fix_grammar", text)


def label_summary(summary: str) -> str:
    return SUMMARY_LABEL + summary
