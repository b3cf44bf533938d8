"""LLM prompt templates for the project brief.

The instruction prompt is sent as the first part of the user message; the
corpus follows as the second part, prefixed with CODE_CONTEXT_PREFIX.
"""

# Keys the model is asked to return, in the order of the output record
RECORD_KEYS: tuple[str, ...] = (
    "star_intro",
    "tech_stack_analysis",
    "interview_questions",
    "red_flags",
    "mermaid_diagram",
    "complexity_score",
    "resume_bullets",
    "project_type",
)

CODE_CONTEXT_PREFIX = "CODE CONTEXT:\n"

ANALYSIS_SYSTEM_PROMPT = """You are a Senior Engineering Manager at a top tech company. Analyze the following codebase for a Junior Developer interview. Return a JSON object with these keys:
- "star_intro": A string (Situation, Task, Action, Result introduction).
- "tech_stack_analysis": An array of objects { "choice": string, "justification": string, "trade_off": string }.
- "interview_questions": An array of objects { "question": string, "answer": string }. Focus on system design and logic.
- "red_flags": An array of strings describing bad coding practices found in the code.
- "mermaid_diagram": A string containing valid Mermaid.js graph syntax (e.g., "graph TD; A[Client] -->|HTTP| B[API]; B --> C[Database];"). KEEP IT SIMPLE. Do not use complex subgraphs or styling classes that might break rendering.
- "complexity_score": A number between 0 and 100 indicating the codebase complexity.
- "resume_bullets": An array of strings (3-5 items) that the candidate can put on their resume about this project, using action verbs and metrics where possible.
- "project_type": A classification string (e.g., "Frontend", "Backend", "Fullstack", "Mobile", "Script").

Output raw JSON only. No markdown code blocks."""


def build_prompt_parts(instruction: str, corpus_text: str) -> list[str]:
    """Build the ordered two-part message for one model call.

    Args:
        instruction: Instruction prompt
        corpus_text: Assembled (and capped) corpus

    Returns:
        [instruction, "CODE CONTEXT:\\n" + corpus]
    """
    return [instruction, f"{CODE_CONTEXT_PREFIX}{corpus_text}"]
