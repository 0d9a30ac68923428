"""One chat session: the current document plus the messages exchanged about it."""
import logging
from typing import Callable, Optional

from asknote.errors import InvalidInputError
from asknote.models.chat import ChatMessage
from asknote.models.document_text import DocumentText
from asknote.tools.answer import AnswerSynthesizer
from asknote.tools.pdf_extract import PageResult, extract_document
from asknote.tools.suggestions import suggest_questions

logger = logging.getLogger(__name__)

BOT_NAME = "AskNoteBot"


class DocumentSession:
    """
    Holds at most one document and its chat history for the session.

    Loading a new document replaces the previous one and clears the history.
    Nothing is written to disk.
    """

    def __init__(self, synthesizer: AnswerSynthesizer):
        self.synthesizer = synthesizer
        self.document: Optional[DocumentText] = None
        self.filename: Optional[str] = None
        self.messages: list[ChatMessage] = []

    @property
    def has_document(self) -> bool:
        return self.document is not None and self.document.has_text

    def load_document(
        self,
        file_bytes: Optional[bytes],
        mime_type: Optional[str],
        filename: Optional[str] = None,
        progress_callback: Optional[Callable[[PageResult], None]] = None
    ) -> DocumentText:
        """
        Extract and install a new document.

        Extraction errors propagate; the current document is kept in that case.
        """
        document = extract_document(file_bytes, mime_type, progress_callback=progress_callback)
        self.document = document
        self.filename = filename
        self.messages = []
        logger.info(f"Loaded {filename or 'document'} ({len(document.pages)} pages with text)")
        return document

    def ask(self, question: str) -> str:
        """Answer a question about the current document and record the exchange."""
        question = (question or "").strip()
        if not question:
            raise InvalidInputError("Question must not be empty")

        self.messages.append(ChatMessage(sender="user", text=question))
        answer = self.synthesizer.answer(self.document, question)
        self.messages.append(ChatMessage(sender="bot", text=answer))
        return answer

    def suggested_questions(self, limit: int = 10) -> list[str]:
        if self.document is None:
            return []
        return suggest_questions(self.document.full_text, limit=limit)

    def reset(self) -> None:
        """Drop the document and the chat history."""
        self.document = None
        self.filename = None
        self.messages = []

    def export_transcript(self) -> str:
        """Render the chat history as plain text, one block per message."""
        lines = []
        for msg in self.messages:
            speaker = "You" if msg.sender == "user" else BOT_NAME
            lines.append(f"{speaker}: {msg.text}\n")
        return "\n".join(lines)
