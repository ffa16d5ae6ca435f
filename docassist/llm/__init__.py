"""LLM integration package.

Chat-completion client for OpenAI-compatible endpoints and the fixed prompt
templates used by the text commands.
"""

from .client import (
    ApiError,
    CompletionClient,
    CompletionFailure,
    CompletionResult,
    CompletionSuccess,
    MalformedResponseError,
    render_inline,
)
from .prompts import (
    SUMMARY_LABEL,
    enhance_prompt,
    fix_grammar_prompt,
    label_summary,
    summarize_prompt,
)

__all__ = [
    "ApiError",
    "CompletionClient",
    "CompletionFailure",
    "CompletionResult",
    "CompletionSuccess",
    "MalformedResponseError",
    "render_inline",
    "SUMMARY_LABEL",
    "enhance_prompt",
    "fix_grammar_prompt",
    "label_summary",
    "summarize_prompt",
]
