"""
Solution prompt composition.

Turns one Question (with its Topic, Part and Slot resolved) plus a handful of
already-solved sibling questions into the single prompt sent to the model.
Pure string building: no database access, no network.
"""

from typing import Iterable, List, Sequence

from database.models import Question


NO_TOPIC_NOTES = "No specific notes provided for this topic."
UNKNOWN_GROUP = "Unknown"


# ─── Solution Prompt ───────────────────────────────────────────────────────────

SOLUTION_PROMPT = """You are an expert educator and problem solver specializing in academic questions. Your task is to:
1. Carefully analyze the given question and all options
2. Determine the correct answer(s) based on fundamental principles
3. Generate a detailed, step-by-step solution
4. Use the provided topic notes as reference material when applicable

CRITICAL REQUIREMENTS:
- Answer must be EXACTLY correct - double-check your reasoning
- Solution must be clear, logical, and educational
- Use topic notes concepts when relevant to enhance understanding
- Format answer as KaTeX-compatible text for option IDs only
- Provide step-by-step reasoning in the solution
{grouping_block}
**Question:**
{question_text}

**Options:**
{options}

**Topic Notes (use these concepts in the solution if applicable):**
{topic_notes}
{examples_block}
**Instructions:**
1. Read the question carefully and understand what is being asked
2. Analyze each option systematically
3. Apply relevant concepts from the topic notes if applicable
4. Determine the correct answer(s) with certainty
5. Provide a clear, step-by-step solution

**Output Format:**
Respond with a valid JSON object containing exactly these two keys:
- "answer": The correct option ID(s) in KaTeX format (e.g., "\\\\text{{A}}" for single option or "\\\\text{{A, C}}" for multiple)
- "solution": A detailed step-by-step explanation with clear reasoning

Example responses:
Single correct option: {{"answer": "\\\\text{{A}}", "solution": "Step 1: Analyze the question...\\nStep 2: Apply the concept...\\nStep 3: Therefore, option A is correct because..."}}
Multiple correct options: {{"answer": "\\\\text{{A, C}}", "solution": "Step 1: Examine each option...\\nStep 2: Options A and C are both correct because..."}}

Ensure your JSON is properly formatted and the solution is comprehensive yet concise.
"""

GROUPING_BLOCK = """
**Exam Context:**
- Part: {part_name}
- Slot: {slot_name}
"""

EXAMPLES_BLOCK = """
**Previously Solved Questions from the Same Topic (for reference only):**
{examples}
"""


# ─── Section formatters ────────────────────────────────────────────────────────

def format_options(options: Iterable[dict]) -> str:
    """One `<id>: <text>` line per option, in the question's own order."""
    return "\n".join(f"{opt['id']}: {opt['text']}" for opt in options)


def resolve_topic_notes(question: Question) -> str:
    notes = question.topic.notes if question.topic else None
    if not notes or not notes.strip():
        return NO_TOPIC_NOTES
    return notes.strip()


def format_reference_examples(examples: Sequence[Question]) -> str:
    """Worked examples limited to question text, stored answer, stored solution."""
    parts: List[str] = []
    for i, ex in enumerate(examples, start=1):
        parts.append(
            f"Example {i}:\n"
            f"Question: {ex.question_text}\n"
            f"Answer: {ex.answer}\n"
            f"Solution: {ex.solution}"
        )
    return "\n\n".join(parts)


# ─── Main builder ──────────────────────────────────────────────────────────────

def build_solution_prompt(
    question: Question,
    reference_examples: Sequence[Question] = (),
    include_grouping: bool = True,
) -> str:
    """
    Compose the solution prompt for one question.

    Args:
        question:           Question with topic (and optionally part/slot) loaded
        reference_examples: Solved questions shown as worked examples; the
                            current question is skipped if present
        include_grouping:   Add the Part/Slot context block

    Returns:
        Prompt text asking for a JSON object with "answer" and "solution"
    """
    grouping_block = ""
    if include_grouping:
        grouping_block = GROUPING_BLOCK.format(
            part_name=question.part.name if question.part and question.part.name else UNKNOWN_GROUP,
            slot_name=question.slot.name if question.slot and question.slot.name else UNKNOWN_GROUP,
        )

    examples = [ex for ex in reference_examples if ex.id != question.id]
    examples_block = ""
    if examples:
        examples_block = EXAMPLES_BLOCK.format(examples=format_reference_examples(examples))

    return SOLUTION_PROMPT.format(
        grouping_block=grouping_block,
        question_text=question.question_text,
        options=format_options(question.options or []),
        topic_notes=resolve_topic_notes(question),
        examples_block=examples_block,
    )
