"""Select the part of the document text relevant to a question."""
import re
from typing import Sequence

from asknote.models.document_text import PARAGRAPH_BREAK, ContextSelection, PageContent

# Used when no paragraph contains the question
FALLBACK_CONTEXT_CHARS = 3000
# Prefix of a matched paragraph looked up in page texts
PAGE_MATCH_PREFIX_CHARS = 100

_PARAGRAPH_SPLIT = re.compile(r"\n\n+")


def select_context(
    full_text: str,
    pages: Sequence[PageContent],
    question: str
) -> ContextSelection:
    """
    Pick paragraphs containing the question and the pages they came from.

    Matching is a literal, case-insensitive substring test of the trimmed
    question against each paragraph. When nothing matches, the context is
    the first FALLBACK_CONTEXT_CHARS characters of the full text (this can
    cut a sentence in half) and no pages are attributed.

    Args:
        full_text: Document text with paragraphs separated by blank lines
        pages: Per-page text of the same document
        question: User question

    Returns:
        ContextSelection with context and sorted unique page numbers
    """
    if not full_text or not full_text.strip():
        return ContextSelection(context="", pages=[])

    search_term = question.lower().strip()
    paragraphs = [p for p in _PARAGRAPH_SPLIT.split(full_text) if p.strip()]
    matches = [p for p in paragraphs if search_term in p.lower()]

    context = PARAGRAPH_BREAK.join(matches) if matches else full_text[:FALLBACK_CONTEXT_CHARS]

    matched_pages: list[int] = []
    for match in matches:
        fragment = match[:PAGE_MATCH_PREFIX_CHARS]
        for page in pages:
            if fragment in page.text and page.page_number not in matched_pages:
                matched_pages.append(page.page_number)

    return ContextSelection(context=context, pages=sorted(matched_pages))
