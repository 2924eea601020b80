"""System prompt assembly for the lesson tutor."""

GENERIC_TUTOR_PROMPT = (
    "You are a helpful AI Tutor. Help the student understand their learning material."
)


def build_system_prompt(
    context: str = "",
    lesson_title: str | None = None,
    lesson_description: str | None = None,
) -> str:
    """Build the tutor's system prompt, embedding grounding context if any.

    Without a lesson title the generic tutor prompt is returned and the
    context is ignored, since there is no lesson to ground against.
    """
    if not lesson_title:
        return GENERIC_TUTOR_PROMPT

    parts = [
        f'You are a helpful AI Tutor for the lesson: "{lesson_title}".',
        f"Description: {lesson_description or 'No description provided.'}",
    ]
    if context:
        parts.append(context)
    parts.append(
        "Your goal is to help students understand the material. "
        "Be encouraging, precise, and educational."
    )
    return "\n\n".join(parts)
