"""Answer questions about the uploaded document with a remote language model."""
import logging
from typing import Optional
from urllib.parse import quote

from pydantic import BaseModel

from asknote.config import Settings, load_settings
from asknote.models.document_text import DocumentText
from asknote.tools.context_select import select_context
from asknote.tools.conversation_router import ChatModel, ConversationRouter, DirectRouter, ToneRouter
from asknote.tools.llm_client import GeminiChat

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = (
    "Oops! Looks like there's no content to work with. 🤔 "
    "Please upload a document so I can help you out! 📄"
)
NO_ANSWER_PLACEHOLDER = "Oops! I couldn't generate an answer this time. 😬 Try again!"
ERROR_MESSAGE = "⚠️ Something went wrong while trying to answer your question. Try again later. 😕"

ANSWER_PROMPT = """You're a modern, expert-level assistant with a friendly vibe. You explain complex topics in a way that's easy to understand, while keeping things casual and fun! Your answers should:
- Use **headings** to organize key concepts 📑
- Include **bullet points** for lists ✔️
- Add **emojis** to keep it engaging 🎉
- Be **descriptive** and easy to digest 🧠

Here's the context from the document:
{context}

And the user's question:
{question}

Answer:"""

GOOGLE_SEARCH_URL = "https://www.google.com/search?q={}"
YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query={}"


class ExternalResources(BaseModel):
    """Search links for following up on a question."""
    google: str
    youtube: str


def find_external_resources(topic: str) -> ExternalResources:
    """Build Google and YouTube search URLs for the topic."""
    # Same escaping as JavaScript's encodeURIComponent
    encoded = quote(topic, safe="!*'()")
    return ExternalResources(
        google=GOOGLE_SEARCH_URL.format(encoded),
        youtube=YOUTUBE_SEARCH_URL.format(encoded)
    )


def build_answer_prompt(context: str, question: str) -> str:
    return ANSWER_PROMPT.format(context=context, question=question)


def format_answer(raw_answer: str, pages: list[int], question: str) -> str:
    """Wrap the model reply with the page note and external links."""
    pages_note = ""
    if pages:
        plural = "s" if len(pages) > 1 else ""
        pages_note = f"\n\n📄 This info came from page{plural} {', '.join(str(p) for p in pages)}."

    resources = find_external_resources(question)
    external = (
        "\n\n🔍 **External resources**:"
        f"\n- [Google Search]({resources.google})"
        f"\n- [YouTube Videos]({resources.youtube})"
    )

    return (
        f"💡 **Answer for your question:**\n\n{raw_answer}{pages_note}{external}"
        "\n\n✨ Let me know if you'd like to dive deeper! 😊"
    )


class AnswerSynthesizer:
    """
    Turn a question about a document into a formatted answer string.

    answer() never raises: failures become ERROR_MESSAGE.
    """

    def __init__(
        self,
        chat: ChatModel,
        router: Optional[ConversationRouter] = None,
        temperature: float = 0.7
    ):
        self.chat = chat
        self.router = router or DirectRouter()
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "AnswerSynthesizer":
        settings = settings or load_settings()
        chat = GeminiChat(settings)
        router = ToneRouter(chat, settings.tone_temperature) if settings.tone_routing else DirectRouter()
        return cls(chat, router=router, temperature=settings.answer_temperature)

    def answer(self, document: Optional[DocumentText], question: str) -> str:
        if document is None or not document.has_text:
            return NO_CONTENT_MESSAGE

        try:
            canned = self.router.route(question)
            if canned is not None:
                return canned

            selection = select_context(document.full_text, document.pages, question)
            logger.info(
                f"Selected {len(selection.context)} chars of context "
                f"from pages {selection.pages or 'n/a'}"
            )

            raw_answer = self.chat.complete(
                build_answer_prompt(selection.context, question),
                self.temperature
            )
            if not raw_answer:
                logger.warning("Model returned no content")
                raw_answer = NO_ANSWER_PLACEHOLDER

            return format_answer(raw_answer, selection.pages, question)

        except Exception as e:
            logger.error(f"Error answering question: {e}", exc_info=True)
            return ERROR_MESSAGE


def answer_question(
    document: Optional[DocumentText],
    question: str,
    settings: Optional[Settings] = None
) -> str:
    """Answer a single question with a synthesizer built from settings."""
    return AnswerSynthesizer.from_settings(settings).answer(document, question)
