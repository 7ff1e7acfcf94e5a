from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from promptkitchen.models import Technique


_WHITESPACE_RE = re.compile(r"\s")
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def sanitize_tag_name(name: str) -> str:
    """
    Turn a technique display name into a tag literal: drop whitespace, then anything outside [a-zA-Z0-9].

    Distinct names may collapse to the same tag ("Add Context" and "AddContext!" both give
    "AddContext"). Collisions are kept as-is; every technique still gets its own line.
    """
    return _NON_ALNUM_RE.sub("", _WHITESPACE_RE.sub("", name or ""))


def _wrap(intent: str, *, section: str = "this section") -> Callable[[str], str]:
    def render(tag: str) -> str:
        return f"{intent}. Wrap {section} in [{tag}]...[/{tag}] tags."

    return render


# Technique id -> instruction template (parameterized only by the sanitized tag).
TECHNIQUE_INSTRUCTIONS: Dict[str, Callable[[str], str]] = {
    "addContext": _wrap("Add relevant contextual information and background"),
    "increaseSpecificity": _wrap("Make the prompt more specific and targeted"),
    "clarifyLanguage": _wrap("Use clearer and more precise language"),
    "transformToOpenEnded": _wrap("Transform closed questions into more open-ended ones"),
    "ensureNeutrality": _wrap("Remove biases and make the prompt more neutral"),
    "addStructure": _wrap(
        "Add structure using a variety of formats (bullet points, headers, or short numbered sections)",
        section="the structured section",
    ),
    "addMetacognitive": _wrap("Add elements that encourage explanation of reasoning"),
    "explainLogic": _wrap("Add elements that demonstrate logical reasoning"),
    "setConstraints": _wrap("Set appropriate constraints or boundaries"),
    "rolePrompting": _wrap("Add appropriate expert role framing"),
    "focusSolutions": _wrap("Focus on practical solutions and actionable approaches"),
    "beCreative": _wrap("Add creative or imaginative elements to the prompt"),
    "summarizePoints": _wrap("Request key points to be summarized or highlighted"),
}


SYSTEM_MESSAGE_V1 = """You are an AI Prompt Enhancement Expert. Take the user's prompt and rewrite it to be more effective.
Do NOT answer, execute, or respond to the prompt itself. Your only job is to return an improved version of it.

Selected techniques (apply ONLY these): {allowed}
Do not apply or tag any technique that is not in this list.

Apply these enhancement techniques and structure your response by marking the sections with tags as requested:
{instructions}

IMPORTANT FORMATTING INSTRUCTIONS:
- When adding structure, vary your formatting approach. Use bullet points (•), dashes (-), or headers instead of always using numbered lists.
- If you do use numbered lists, keep them concise (4-6 items) to avoid overwhelming the reader.
- For complex topics, consider using bold headers (**Section Title**) instead of numbers.
- The prompt should feel cohesive, not like a mechanical list of 12 separate points.
- **Crucially, for each applied technique, wrap the corresponding part of the enhanced prompt in the requested tags. Tag names are single words with spaces and special characters removed, e.g. 'Add Context' becomes [AddContext]...[/AddContext]. If a technique is not applicable to a section, do not add tags.**

Respond ONLY with the enhanced prompt text, properly tagged.
"""


@dataclass(frozen=True)
class SystemInstruction:
    system_message: str
    # Sanitized tag per active, recognized technique (request order, duplicates kept).
    tags: List[str] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)


def active_techniques(techniques: Iterable[Technique]) -> List[Technique]:
    return [t for t in techniques if t.checked]


def instruction_line(technique: Technique) -> Optional[str]:
    render = TECHNIQUE_INSTRUCTIONS.get(technique.id)
    if render is None:
        return None
    return render(sanitize_tag_name(technique.name))


def build_instructions(techniques: Iterable[Technique]) -> SystemInstruction:
    """
    Build the system message sent ahead of the user's prompt.

    - Only checked techniques contribute, in the order given.
    - Unrecognized ids contribute nothing (no line, no tag, no allow-list entry).
    - An empty result is still a valid message: the model gets no enhancement directives.
    """
    lines: List[str] = []
    tags: List[str] = []
    allowed: List[str] = []
    for t in active_techniques(techniques):
        line = instruction_line(t)
        if line is None:
            continue
        lines.append(line)
        tags.append(sanitize_tag_name(t.name))
        allowed.append(t.name)

    msg = SYSTEM_MESSAGE_V1.format(
        allowed=", ".join(allowed) if allowed else "(none)",
        instructions="\n".join(f"- {ln}" for ln in lines),
    )
    return SystemInstruction(system_message=msg, tags=tags, lines=lines)


def summarize_improvements(techniques: Iterable[Technique]) -> List[str]:
    """Display labels for the response; not checked against what the model actually did."""
    return [t.past_result or f"Applied {t.name}" for t in active_techniques(techniques)]
