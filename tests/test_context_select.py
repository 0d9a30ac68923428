"""Tests for asknote.tools.context_select."""
from asknote.models.document_text import DocumentText, PageContent
from asknote.tools.context_select import FALLBACK_CONTEXT_CHARS, select_context


def _document(*texts: str) -> DocumentText:
    return DocumentText.from_pages(
        [PageContent(page_number=i, text=t) for i, t in enumerate(texts, 1)]
    )


def test_empty_text_returns_empty_selection() -> None:
    result = select_context("", [], "anything")
    assert result.context == ""
    assert result.pages == []


def test_whitespace_text_returns_empty_selection() -> None:
    result = select_context("  \n\n ", [], "anything")
    assert result.context == ""
    assert result.pages == []


def test_case_insensitive_paragraph_match() -> None:
    result = select_context("Deadline is March 1.\n\nSee appendix.", [], "deadline")
    assert result.context == "Deadline is March 1."


def test_question_is_trimmed_before_matching() -> None:
    result = select_context("Deadline is March 1.\n\nSee appendix.", [], "  APPENDIX  ")
    assert result.context == "See appendix."


def test_multiple_matches_keep_order_and_pages() -> None:
    doc = _document("The budget is fixed.", "Nothing here.", "Budget overruns are reported monthly.")
    result = select_context(doc.full_text, doc.pages, "budget")

    assert result.context == "The budget is fixed.\n\nBudget overruns are reported monthly."
    assert result.pages == [1, 3]


def test_no_match_falls_back_to_prefix() -> None:
    long_text = ("lorem ipsum dolor sit amet " * 300).strip()
    doc = _document(long_text)
    result = select_context(doc.full_text, doc.pages, "quantum chromodynamics")

    assert result.context == doc.full_text[:FALLBACK_CONTEXT_CHARS]
    assert len(result.context) == 3000
    assert result.pages == []


def test_split_on_runs_of_blank_lines() -> None:
    text = "alpha topic\n\n\n\nbeta\n\n\n\ngamma topic"
    result = select_context(text, [], "topic")
    assert result.context == "alpha topic\n\ngamma topic"


def test_page_attribution_uses_paragraph_prefix() -> None:
    paragraph = "x" * 150 + " keyword"
    pages = [
        PageContent(page_number=2, text="x" * 100 + " continues on another page"),
        PageContent(page_number=5, text=paragraph),
    ]
    result = select_context(paragraph, pages, "keyword")

    # Both pages contain the first 100 characters of the match
    assert result.pages == [2, 5]


def test_pages_are_unique_when_several_paragraphs_share_a_page() -> None:
    pages = [PageContent(page_number=4, text="Risk one. Risk two.")]
    full_text = "Risk one.\n\nRisk two."
    result = select_context(full_text, pages, "risk")

    assert result.pages == [4]
