"""Embed a RAG result into an LLM prompt."""

from .contracts import RAGResult

NO_GROUNDING_NOTE = "No additional information could be retrieved from the web for this question."


def format_reference_list(rag_result: RAGResult) -> str:
    return "\n".join(f"- {c.title}: {c.url}" for c in rag_result.citations)


def build_grounded_prompt(user_input: str, rag_result: RAGResult | None) -> str:
    """
    Build the answer prompt for ``user_input``.

    The RAG context is inserted verbatim. An empty-citation result is treated
    as "no grounding found": the model is told so instead of being handed a
    header with nothing under it.
    """
    lines = [
        "You are NutriCare, a nutrition and food-safety assistant.",
        "Answer the user's question accurately and concisely.",
        "",
    ]

    if rag_result is not None and rag_result.has_grounding:
        lines += [
            "Reference information retrieved from the web:",
            rag_result.context,
            "",
            "Sources:",
            format_reference_list(rag_result),
            "",
            "When you use the reference information, cite the source names shown above.",
            "",
        ]
    elif rag_result is not None:
        lines += [NO_GROUNDING_NOTE, ""]

    lines += ["User question:", user_input.strip()]
    return "\n".join(lines)
