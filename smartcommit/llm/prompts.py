"""Prompt construction for commit message generation.

The default prompt is assembled from:
1. The base instruction plus the style's instruction block and a language
   instruction (all replaced by custom instructions when given)
2. The diff
3. Fixed formatting guidelines

A resolved template replaces all of the above; only its {{diff}} and
{{model}} placeholders are filled here.
"""

from typing import Optional

from smartcommit.models import DEFAULT_LANGUAGE, GenerationContext
from smartcommit.styles import get_style_policy
from smartcommit.templates import substitute_variables

BASE_INSTRUCTION = (
    "You are a professional software developer. "
    "Generate a concise, clear commit message describing the code changes."
)

GUIDELINES = """Important guidelines:
1. Ensure the message is under 72 characters for the first line.
2. Use present tense.
3. Focus on WHY the change was made, not just what was changed.
4. If appropriate, include a body with more details after a blank line.
5. Return ONLY the commit message without any additional formatting or explanation."""


def build_instruction_block(context: GenerationContext) -> str:
    """Build the instruction block: base + style + language, or custom instructions."""
    if context.custom_instructions:
        return context.custom_instructions

    parts = [BASE_INSTRUCTION]

    style_block = get_style_policy(context.style).instruction_block(context)
    if style_block:
        parts.append(style_block)

    if context.language and context.language != DEFAULT_LANGUAGE:
        parts.append(f"Write the message in {context.language}.")

    return " ".join(parts)


def build_prompt(context: GenerationContext, model: Optional[str] = None) -> str:
    """Build the full prompt sent to a backend.

    Args:
        context: The generation context.
        model: Name of the model the prompt is for (fills {{model}} in templates).

    Returns:
        The prompt text.
    """
    if context.template_prompt:
        return substitute_variables(
            context.template_prompt,
            {"diff": context.diff_text, "model": model},
        )

    return (
        f"{build_instruction_block(context)}\n\n"
        f"Git diff:\n{context.diff_text}\n\n"
        f"{GUIDELINES}"
    )
