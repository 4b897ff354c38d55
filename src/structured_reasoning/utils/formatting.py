"""Plain-text rendering of thoughts and brainstorming sessions.

The rendered text is echoed in responses and written to the debug log. It is
derived from the models and never read back.
"""

from __future__ import annotations

from structured_reasoning.models.brainstorm import BrainstormSession
from structured_reasoning.models.thought import ThoughtNode


def _box(header: str, lines: list[str]) -> str:
    width = max([len(header), *(len(line) for line in lines)]) + 2
    border = "─" * width
    body = "\n".join(f"│ {line.ljust(width - 2)} │" for line in lines)
    return f"┌{border}┐\n│ {header.ljust(width - 2)} │\n├{border}┤\n{body}\n└{border}┘"


def format_thought(node: ThoughtNode, total_thoughts: int) -> str:
    """Render a thought as a box with a revision/branch aware header.

    Examples:
        >>> node = ThoughtNode(id=2, content="Check the edge cases", total_estimate=3,
        ...                    needs_follow_up=True, revision_of=1)
        >>> print(format_thought(node, 3).splitlines()[1])
        │ Revision 2/3 (revising thought 1) │
    """
    context = []
    if node.is_revision:
        prefix = "Revision"
        context.append(f"revising thought {node.revision_of}")
    elif node.is_branch:
        prefix = "Branch"
    else:
        prefix = "Thought"
    if node.is_branch:
        context.append(f"from thought {node.branch_from}, ID: {node.branch_id}")

    header = f"{prefix} {node.id}/{total_thoughts}"
    if context:
        header += f" ({'; '.join(context)})"
    return _box(header, node.content.splitlines() or [""])


def format_session(session: BrainstormSession) -> str:
    """Render a brainstorming session summary, one line per idea."""
    header = f"Brainstorm: {session.topic} [{session.phase}]"
    lines = [f"Step {session.current_step}/{session.total_steps}"]
    if session.participants:
        lines.append(f"Participants: {', '.join(sorted(session.participants))}")
    if not session.ideas:
        lines.append("No ideas yet")
    for idea in session.ideas:
        marker = "*" if idea.selected else "-"
        line = f"{marker} {idea.text} ({idea.votes} votes)"
        if idea.category:
            line += f" [{idea.category}]"
        lines.append(line)
        lines.extend(f"    > {action}" for action in idea.actions)
    return _box(header, lines)


__all__ = ["format_session", "format_thought"]
