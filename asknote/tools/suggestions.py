"""Suggest starter questions based on keywords in the document."""

OPENING_QUESTIONS = [
    "What is this document about?",
    "Can you summarize the main points?",
]

# (keywords, question): question is added if any keyword appears in the text
KEYWORD_QUESTIONS: list[tuple[tuple[str, ...], str]] = [
    (("deadline", "date"), "What are the important dates and deadlines mentioned?"),
    (("requirement", "specification"), "What are the main requirements outlined in this document?"),
    (("chapter", "section"), "What are the main sections or chapters in this document?"),
    (("conclusion",), "What are the key conclusions or findings?"),
    (("reference", "bibliography"), "What are the key references cited in this document?"),
    (("table", "figure"), "What are the key tables or figures in this document?"),
    (("method", "methodology"), "What methods or methodologies are discussed in this document?"),
    (("result", "finding"), "What are the main results or findings?"),
]

COMPREHENSION_QUESTIONS = [
    "Could you explain the main concepts in simpler terms?",
    "What are the most important takeaways from this document?",
    "Are there any key terms or definitions I should know?",
]


def suggest_questions(full_text: str, limit: int = 10) -> list[str]:
    """Return up to `limit` unique suggested questions for the document text."""
    if not full_text or not full_text.strip():
        return []

    text_lower = full_text.lower()
    questions = list(OPENING_QUESTIONS)
    for keywords, question in KEYWORD_QUESTIONS:
        if any(k in text_lower for k in keywords):
            questions.append(question)
    questions.extend(COMPREHENSION_QUESTIONS)

    return list(dict.fromkeys(questions))[:limit]
