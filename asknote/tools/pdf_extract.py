"""Extract per-page text from uploaded PDFs using PyMuPDF with pdfplumber fallback."""
import io
import logging
from contextlib import contextmanager
from functools import partial
from typing import Callable, Iterator, Optional, Sequence

import fitz
import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect
from pydantic import BaseModel

from asknote.errors import EmptyContentError, InvalidInputError, ParseError, UnsupportedDocumentError
from asknote.models.document_text import DocumentText, PageContent

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"

_RUNTIME_CONFIGURED = False


class PageResult(BaseModel):
    """Outcome of reading one page: content, an error, or nothing (blank page)."""
    page_number: int
    content: Optional[PageContent] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.content is not None


def configure_pdf_runtime() -> None:
    """
    One-time process-wide PyMuPDF setup.

    MuPDF prints its own errors and warnings to stderr by default; turn that
    off so page failures are reported through logging only.
    """
    global _RUNTIME_CONFIGURED
    if _RUNTIME_CONFIGURED:
        return
    fitz.TOOLS.mupdf_display_errors(False)
    fitz.TOOLS.mupdf_display_warnings(False)
    _RUNTIME_CONFIGURED = True


def extract_document(
    file_bytes: Optional[bytes],
    mime_type: Optional[str],
    progress_callback: Optional[Callable[[PageResult], None]] = None
) -> DocumentText:
    """
    Extract text from an uploaded PDF.

    Args:
        file_bytes: Raw PDF bytes
        mime_type: Declared MIME type of the upload
        progress_callback: Optional callback(PageResult) called once per page

    Returns:
        DocumentText with the non-empty pages in page order

    Raises:
        InvalidInputError: no file or not a PDF
        UnsupportedDocumentError: password protected PDF
        ParseError: document cannot be opened
        EmptyContentError: no readable text on any page
    """
    if not file_bytes:
        raise InvalidInputError("No file provided")
    if mime_type != PDF_MIME_TYPE:
        raise InvalidInputError("Invalid file type. Please upload a PDF file.")

    configure_pdf_runtime()

    with _open_pdf(file_bytes) as page_readers:
        if not page_readers:
            raise ParseError("Invalid PDF document structure")

        logger.info(f"📄 Extracting text from {len(page_readers)} pages...")
        pages: list[PageContent] = []
        failed = 0
        for result in iter_page_results(page_readers):
            if progress_callback:
                progress_callback(result)
            if result.ok:
                pages.append(result.content)
            elif result.error:
                failed += 1

    _log_mupdf_warnings()

    document = DocumentText.from_pages(pages)
    if not document.has_text:
        raise EmptyContentError(
            "No readable text found in the PDF. "
            "The document might be scanned or contain only images."
        )

    logger.info(
        f"✅ Extracted {len(pages)} pages with text "
        f"({failed} failed, {len(page_readers) - len(pages) - failed} empty)"
    )
    return document


def iter_page_results(page_readers: Sequence[Callable[[], str]]) -> Iterator[PageResult]:
    """
    Read pages in order, yielding one PageResult per page.

    A reader that raises produces an error result; the remaining pages are
    still read.
    """
    for index, read_page in enumerate(page_readers):
        page_number = index + 1
        try:
            text = _normalize_page_text(read_page())
        except Exception as e:
            logger.warning(f"Error processing page {page_number}: {e}")
            yield PageResult(page_number=page_number, error=str(e) or type(e).__name__)
            continue

        if not text:
            logger.debug(f"No text content found on page {page_number}")
            yield PageResult(page_number=page_number)
            continue

        yield PageResult(
            page_number=page_number,
            content=PageContent(page_number=page_number, text=text)
        )


def _normalize_page_text(raw: Optional[str]) -> str:
    """Join the page's text runs with single spaces and trim."""
    if not raw:
        return ""
    return " ".join(raw.split())


@contextmanager
def _open_pdf(file_bytes: bytes) -> Iterator[list[Callable[[], str]]]:
    """
    Open the PDF and yield one text reader per page.

    Uses PyMuPDF first, falls back to pdfplumber if PyMuPDF cannot open it.
    """
    doc = _open_with_pymupdf(file_bytes)
    if doc is not None:
        try:
            if doc.needs_pass:
                raise UnsupportedDocumentError("Password protected PDFs are not supported")
            yield [partial(_pymupdf_page_text, doc, i) for i in range(doc.page_count)]
        finally:
            doc.close()
        return

    pdf = _open_with_pdfplumber(file_bytes)
    if pdf is None:
        raise ParseError("Failed to open PDF with both PyMuPDF and pdfplumber")
    try:
        try:
            page_count = len(pdf.pages)
        except Exception as e:
            raise ParseError(f"Invalid PDF document structure: {e}") from e
        yield [partial(_pdfplumber_page_text, pdf, i) for i in range(page_count)]
    finally:
        pdf.close()


def _open_with_pymupdf(file_bytes: bytes) -> Optional["fitz.Document"]:
    """Open with PyMuPDF (fitz). Returns None on failure."""
    try:
        return fitz.open(stream=file_bytes, filetype="pdf")
    except Exception as e:
        logger.info(f"PyMuPDF could not open document: {e}")
        return None


def _open_with_pdfplumber(file_bytes: bytes) -> Optional["pdfplumber.PDF"]:
    """Open with pdfplumber. Returns None on failure."""
    try:
        return pdfplumber.open(io.BytesIO(file_bytes))
    except Exception as e:
        if _is_password_error(e):
            raise UnsupportedDocumentError("Password protected PDFs are not supported") from e
        logger.info(f"pdfplumber could not open document: {e}")
        return None


def _is_password_error(error: BaseException) -> bool:
    """True if pdfminer rejected the document for lack of a password."""
    # Newer pdfplumber wraps pdfminer errors; the original is in args or __cause__
    candidates = [error, error.__cause__, error.__context__, *error.args]
    return any(isinstance(c, PDFPasswordIncorrect) for c in candidates)


def _pymupdf_page_text(doc: "fitz.Document", index: int) -> str:
    return doc.load_page(index).get_text()


def _pdfplumber_page_text(pdf: "pdfplumber.PDF", index: int) -> str:
    return pdf.pages[index].extract_text() or ""


def _log_mupdf_warnings() -> None:
    """Drain MuPDF's accumulated warnings into the debug log."""
    warnings = fitz.TOOLS.mupdf_warnings()
    if warnings:
        logger.debug(f"MuPDF warnings:\n{warnings}")
