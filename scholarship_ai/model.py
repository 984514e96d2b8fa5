from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from jinja2 import Template

from .config import DEFAULT_SCHOLARSHIP
from .errors import ValidationError
from .prompt_templates import FEEDBACK_PROMPT, GENERATE_PROMPT, IMPROVE_PROMPT, SECTION_HINTS

# -------- Data models --------
@dataclass
class Context:
    name: Optional[str] = None
    gpa: Optional[str] = None
    major: Optional[str] = None
    goals: Optional[str] = None
    achievements: Optional[str] = None
    involvement: Optional[str] = None
    financial_need: Optional[str] = None
    existing_text: Optional[str] = None

# Letter sections that get an extra sentence in the generate prompt.
SECTIONS: Tuple[str, ...] = tuple(SECTION_HINTS)

# (attribute, label) in the order the lines appear in every prompt
CONTEXT_FIELDS: List[Tuple[str, str]] = [
    ("name", "Student Name"),
    ("gpa", "GPA"),
    ("major", "Major"),
    ("goals", "Career Goals"),
    ("achievements", "Key Achievements"),
    ("involvement", "Extracurricular Involvement"),
    ("financial_need", "Financial Need Context"),
]

GENERATE_TEMPLATE = Template(GENERATE_PROMPT)
IMPROVE_TEMPLATE = Template(IMPROVE_PROMPT)
FEEDBACK_TEMPLATE = Template(FEEDBACK_PROMPT)


def context_lines(context: Context) -> str:
    """One ``- Label: value`` line per populated field; empty fields are skipped."""
    lines = []
    for attr, label in CONTEXT_FIELDS:
        value = getattr(context, attr)
        if value:
            lines.append(f"- {label}: {value}\n")
    return "".join(lines)


def _require_existing_text(context: Context, action: str) -> str:
    if not context.existing_text:
        raise ValidationError(f"Missing 'existingText' in context for {action} action")
    return context.existing_text


# -------- Prompt builders --------
def build_generate_prompt(section: str, context: Context, scholarship: str = DEFAULT_SCHOLARSHIP) -> str:
    # existing_text is never shown to the model here; generate writes new content
    return GENERATE_TEMPLATE.render(
        scholarship=scholarship,
        section=section,
        context_lines=context_lines(context),
        section_hint=SECTION_HINTS.get(section),
    )


def build_improve_prompt(section: str, context: Context, scholarship: str = DEFAULT_SCHOLARSHIP) -> str:
    return IMPROVE_TEMPLATE.render(
        scholarship=scholarship,
        section=section,
        existing_text=_require_existing_text(context, "improve"),
        context_lines=context_lines(context),
    )


def build_feedback_prompt(section: str, context: Context, scholarship: str = DEFAULT_SCHOLARSHIP) -> str:
    return FEEDBACK_TEMPLATE.render(
        scholarship=scholarship,
        section=section,
        existing_text=_require_existing_text(context, "feedback"),
        context_lines=context_lines(context),
    )
