"""Context assembly for LLM requests about the vault.

Questions and evening reflections share the same note context: the best
search matches rendered as numbered excerpts. Summaries work on text the
caller supplies.

The completion client itself is an external collaborator; anything with a
``complete(system, prompt)`` method will do.
"""

import logging
from typing import Protocol

from vaultcmd.core.types import SearchIndex, SummaryStyle
from vaultcmd.vault.search import search_vault

logger = logging.getLogger(__name__)

# Number of relevant notes to include as context
CONTEXT_NOTES_LIMIT = 8

# Maximum question length accepted by ask_vault
MAX_QUESTION_LENGTH = 5000

NO_CONTEXT_MESSAGE = "No relevant notes found in the vault."

ASK_SYSTEM_PROMPT = """You are a helpful assistant that answers questions based on the user's personal notes from their Obsidian vault.
Use the provided context from their notes to answer questions accurately.
If the context doesn't contain relevant information, say so honestly.
Keep responses concise and actionable."""


class CompletionProvider(Protocol):
    """Sends a system prompt and user prompt, returns the response text."""

    def complete(self, system: str, prompt: str) -> str:
        ...


def find_relevant_context(
    index: SearchIndex, query: str, limit: int = CONTEXT_NOTES_LIMIT
) -> str:
    """
    Find relevant notes for a query and render them as prompt context.

    An empty query falls back to the most recently modified notes.

    Args:
        index: Search index
        query: Question or theme
        limit: Maximum notes to include

    Returns:
        "[Note i: filename]" blocks separated by blank lines
    """
    results = search_vault(index, query)[:limit]
    if not results:
        return NO_CONTEXT_MESSAGE

    return "\n\n".join(
        f"[Note {i}: {result.filename}]\n{result.preview}"
        for i, result in enumerate(results, 1)
    )


def build_ask_prompt(index: SearchIndex, question: str) -> str:
    """Build the user prompt for a question, with vault context."""
    context = find_relevant_context(index, question)
    return f"Here are relevant excerpts from my notes:\n\n{context}\n\nQuestion: {question}"


def ask_vault(provider: CompletionProvider, index: SearchIndex, question: str) -> str:
    """
    Ask a question about the vault.

    Raises:
        ValueError: If the question is blank or too long.
    """
    if not question.strip():
        raise ValueError("Question required")
    if len(question) > MAX_QUESTION_LENGTH:
        raise ValueError(
            f"Question too long: keep it under {MAX_QUESTION_LENGTH:,} characters"
        )

    prompt = build_ask_prompt(index, question)
    logger.debug(f"Asking with {len(prompt)} chars of prompt")
    return provider.complete(ASK_SYSTEM_PROMPT, prompt)


SUMMARY_SYSTEM_PROMPT = "You are an expert at summarizing personal notes and knowledge."

SUMMARY_STYLE_INSTRUCTIONS = {
    SummaryStyle.BRIEF: "Provide a 2-3 sentence summary capturing the key points.",
    SummaryStyle.DETAILED: "Provide a comprehensive summary with all important details.",
    SummaryStyle.BULLETS: "Summarize as bullet points, one per key insight or action item.",
}

REFLECTION_SYSTEM_PROMPT = """You are a thoughtful guide versed in Stoic philosophy.
Generate a reflection prompt that helps the user think deeply about their work, goals, or personal growth.
Draw inspiration from Stoic thinkers like Marcus Aurelius, Seneca, and Epictetus.
The prompt should be personal and actionable, not abstract philosophy.
Keep it concise: one powerful question or observation that invites genuine reflection."""


def build_summary_prompt(content: str) -> str:
    """Build the user prompt asking for a summary of some note text."""
    return f"Please summarize the following notes:\n\n{content}"


def summarize_notes(
    provider: CompletionProvider,
    content: str,
    style: SummaryStyle | str = SummaryStyle.BRIEF,
) -> str:
    """
    Summarize note text in the given style.

    Raises:
        ValueError: If the style is unknown.
    """
    instructions = SUMMARY_STYLE_INSTRUCTIONS[SummaryStyle(style)]
    system = f"{SUMMARY_SYSTEM_PROMPT} {instructions}"
    return provider.complete(system, build_summary_prompt(content))


def build_reflection_prompt(index: SearchIndex, theme: str | None = None) -> str:
    """
    Build the user prompt for an evening reflection.

    With a theme the context comes from notes matching it; without one
    the most recently modified notes are used.
    """
    theme = (theme or "").strip()
    context = find_relevant_context(index, theme)
    if theme:
        return (
            f'Based on my recent notes about "{theme}":\n\n{context}\n\n'
            "Generate a Stoic reflection prompt that connects to this theme."
        )
    return (
        f"Based on my recent notes:\n\n{context}\n\n"
        "Generate a Stoic reflection prompt for my evening review."
    )


def generate_reflection(
    provider: CompletionProvider, index: SearchIndex, theme: str | None = None
) -> str:
    """Ask the provider for a reflection prompt grounded in the vault."""
    prompt = build_reflection_prompt(index, theme)
    return provider.complete(REFLECTION_SYSTEM_PROMPT, prompt)
