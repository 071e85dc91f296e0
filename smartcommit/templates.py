"""Commit prompt templates.

Templates are plain text files named <name>.txt in a templates directory.
Placeholders use the {{key}} form and are replaced literally; there is no
recursive expansion and no conditional syntax.

Contains:
- TemplateMissingError: Raised when a template file does not exist
- read_template: Read a template from a directory
- substitute_variables: Replace {{key}} placeholders
- resolve_template: Read + substitute, returning None when missing
- write_default_templates: Seed a templates directory
"""

import logging
import re
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".txt"
DEFAULT_TEMPLATES_DIR = "./commit-templates"

DEFAULT_TEMPLATES = {
    "default": """You are a professional software developer. Generate a concise, clear commit message describing the code changes.
Write the message in {{lang}}.

Git diff:
{{diff}}

Important guidelines:
1. Ensure the message is under 72 characters for the first line.
2. Use present tense.
3. Focus on WHY the change was made, not just what was changed.
4. If appropriate, include a body with more details after a blank line.
5. Return ONLY the commit message without any additional formatting or explanation.
""",
    "conventional": """You are a professional software developer. Generate a commit message in conventional commit format: <type>(<scope>): <description>.
Allowed types: feat, fix, docs, style, refactor, perf, test, build, ci, chore.
Use the scope "{{scope}}" if it fits the change; the scope detected from file paths is "{{detectedScope}}".
Write the message in {{lang}}.

Git diff:
{{diff}}

Return ONLY the commit message without any additional formatting or explanation.
""",
}


class TemplateMissingError(Exception):
    """Raised when a named template cannot be found."""

    pass


def get_template_path(name: str, directory: str | Path) -> Path:
    """Get the file path of a named template."""
    return Path(directory) / f"{name}{TEMPLATE_SUFFIX}"


def read_template(name: str, directory: str | Path) -> str:
    """Read a named template.

    Args:
        name: Template name without extension.
        directory: Templates directory.

    Returns:
        The raw template text.

    Raises:
        TemplateMissingError: If the template does not exist or is unreadable.
    """
    template_path = get_template_path(name, directory)

    if not template_path.is_file():
        raise TemplateMissingError(f'Template "{name}" not found at {template_path}')

    try:
        return template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateMissingError(f'Error loading template "{name}": {e}')


_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def substitute_variables(text: str, variables: Mapping[str, Optional[str]]) -> str:
    """Replace every {{key}} whose value is not None in a single pass.

    Placeholders for keys that are absent or None are left untouched.
    Inserted values are never scanned again, so a diff containing
    "{{model}}" stays literal.
    """

    def _replace(match: re.Match) -> str:
        value = variables.get(match.group(1))
        return match.group(0) if value is None else str(value)

    return _PLACEHOLDER.sub(_replace, text)


def resolve_template(
    name: str,
    directory: str | Path,
    variables: Mapping[str, Optional[str]],
) -> Optional[str]:
    """Load a named template and substitute variables.

    Args:
        name: Template name without extension.
        directory: Templates directory.
        variables: Values for {{key}} placeholders; None values are skipped.

    Returns:
        The substituted template with surrounding whitespace stripped, or
        None (after logging a warning) if the template is missing.
    """
    try:
        content = read_template(name, directory)
    except TemplateMissingError as e:
        logger.warning("%s", e)
        return None

    return substitute_variables(content, variables).strip()


def write_default_templates(directory: str | Path, overwrite: bool = False) -> list[Path]:
    """Write the bundled templates into a directory.

    Args:
        directory: Target templates directory (created if missing).
        overwrite: Replace templates that already exist.

    Returns:
        Paths of the templates that were written.
    """
    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)

    written = []
    for name, content in DEFAULT_TEMPLATES.items():
        path = get_template_path(name, target)
        if path.exists() and not overwrite:
            continue
        path.write_text(content, encoding="utf-8")
        written.append(path)
    return written
