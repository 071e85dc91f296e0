"""Commit message style policies.

Each style is a small policy object with two pure functions:
- instruction_block(context): the style's instruction text for the prompt
- post_process(text, context): the style's transformation of the model output

Styles:
- plain: A concise message, no prefix conventions
- conventional: Conventional Commits; a fixed type prefix is prepended
- emoji: A relevant emoji at the start
- gitmoji: Gitmoji codes (https://gitmoji.dev/)
- semantic: Semantic summary line followed by an explanatory body
- summary-body: Exactly a summary paragraph and an optional body paragraph
"""

from enum import Enum

from smartcommit.models import GenerationContext


class StyleProfile(Enum):
    """Available commit message styles."""

    PLAIN = "plain"
    CONVENTIONAL = "conventional"
    EMOJI = "emoji"
    GITMOJI = "gitmoji"
    SEMANTIC = "semantic"
    SUMMARY_BODY = "summary-body"


CONVENTIONAL_TYPES = [
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
]

# Prepended by the conventional style; the type is not inferred from the text
CONVENTIONAL_PREFIX_TYPE = "feat"


class StylePolicy:
    """Base style: no extra instructions, output stripped."""

    profile: StyleProfile = StyleProfile.PLAIN

    def instruction_block(self, context: GenerationContext) -> str:
        return ""

    def post_process(self, text: str, context: GenerationContext) -> str:
        return text.strip()


class PlainStyle(StylePolicy):
    profile = StyleProfile.PLAIN


class ConventionalStyle(StylePolicy):
    profile = StyleProfile.CONVENTIONAL

    def instruction_block(self, context: GenerationContext) -> str:
        block = (
            "Use conventional commit format with appropriate type "
            f"({', '.join(CONVENTIONAL_TYPES)})."
        )
        if context.scope:
            block += f" Use the scope: {context.scope}."
        return block

    def post_process(self, text: str, context: GenerationContext) -> str:
        """Prepend the fixed type prefix, with the scope when one is known."""
        text = text.strip()
        if context.scope:
            return f"{CONVENTIONAL_PREFIX_TYPE}({context.scope}): {text}"
        return f"{CONVENTIONAL_PREFIX_TYPE}: {text}"


class EmojiStyle(StylePolicy):
    profile = StyleProfile.EMOJI

    def instruction_block(self, context: GenerationContext) -> str:
        return "Include a relevant emoji at the start."


class GitmojiStyle(StylePolicy):
    profile = StyleProfile.GITMOJI

    def instruction_block(self, context: GenerationContext) -> str:
        return "Use gitmoji format (https://gitmoji.dev/) with appropriate emoji code."


class SemanticStyle(StylePolicy):
    profile = StyleProfile.SEMANTIC

    def instruction_block(self, context: GenerationContext) -> str:
        return (
            "Start with a one-line semantic summary of the intent of the change, "
            "then a blank line, then a short body explaining the reasoning and impact."
        )


class SummaryBodyStyle(StylePolicy):
    profile = StyleProfile.SUMMARY_BODY

    def instruction_block(self, context: GenerationContext) -> str:
        return (
            "Write exactly one summary paragraph, optionally followed by a blank line "
            "and one body paragraph."
        )

    def post_process(self, text: str, context: GenerationContext) -> str:
        """Keep at most two paragraphs: the summary and the re-joined body."""
        return split_summary_body(text)


def split_summary_body(text: str) -> str:
    """Reduce text to a summary paragraph and an optional body paragraph.

    The first blank-line-delimited block is the summary; all remaining
    blocks are joined line by line into a single body paragraph.
    """
    paragraphs = [block.strip() for block in text.strip().split("\n\n")]
    paragraphs = [block for block in paragraphs if block]

    if not paragraphs:
        return ""

    summary, rest = paragraphs[0], paragraphs[1:]
    if not rest:
        return summary

    body = "\n".join(rest)
    return f"{summary}\n\n{body}"


_POLICIES = {
    StyleProfile.PLAIN: PlainStyle(),
    StyleProfile.CONVENTIONAL: ConventionalStyle(),
    StyleProfile.EMOJI: EmojiStyle(),
    StyleProfile.GITMOJI: GitmojiStyle(),
    StyleProfile.SEMANTIC: SemanticStyle(),
    StyleProfile.SUMMARY_BODY: SummaryBodyStyle(),
}


def get_style_policy(style: str | StyleProfile) -> StylePolicy:
    """Get the policy for a style name.

    Args:
        style: A StyleProfile or its value.

    Returns:
        The matching StylePolicy.

    Raises:
        ValueError: If the style is unknown.
    """
    return _POLICIES[StyleProfile(style)]
