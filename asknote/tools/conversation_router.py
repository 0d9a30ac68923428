"""Decide whether a chat message needs a document-grounded answer."""
import logging
from abc import ABC, abstractmethod
from typing import Literal, Optional, Protocol, cast, get_args

logger = logging.getLogger(__name__)

Tone = Literal["greeting", "goodbye", "thanks", "casual", "topic"]
TONES: tuple[str, ...] = get_args(Tone)

CANNED_REPLIES: dict[Tone, str] = {
    "greeting": (
        "Hey there! 👋 I'm doing awesome, just hanging out in the cloud ☁️ "
        "and ready to assist you. What can I help you with today? 😊"
    ),
    "goodbye": "Bye for now! 👋 Catch you later, and feel free to come back anytime. 🌟",
    "thanks": "You're welcome! 😊 I'm here anytime if you need more info. 🔍",
    "casual": "Haha, I'm all good in the cloud! 😄 What are you looking to explore today? 💬",
}

UNRECOGNIZED_REPLY = "Sorry, I didn't quite catch that. Can you rephrase or ask something else? 🤔"

TONE_PROMPT = """Classify the tone of this user message strictly into one of the following categories:
- "greeting" (e.g., "hey", "how are you", "hello")
- "goodbye" (e.g., "bye", "see you later", "goodnight")
- "thanks" (e.g., "thanks", "thank you", "appreciate it")
- "casual" (e.g., "what's up?", "how's it going?")
- "topic" (asking about a subject, e.g., "What is blockchain?")

Only reply with one of these labels: greeting, goodbye, thanks, casual, topic

Message: "{message}"
Answer:"""


class ChatModel(Protocol):
    def complete(self, prompt: str, temperature: float) -> Optional[str]: ...


class ConversationRouter(ABC):
    """Returns a canned reply for the message, or None to answer from the document."""

    @abstractmethod
    def route(self, question: str) -> Optional[str]:
        ...


class DirectRouter(ConversationRouter):
    """Every message is answered from the document."""

    def route(self, question: str) -> Optional[str]:
        return None


class ToneRouter(ConversationRouter):
    """
    Classify the message tone with a separate model call.

    Greetings, goodbyes, thanks and small talk get a canned reply; only
    "topic" messages fall through to the grounded answer. Classification
    errors propagate to the caller.
    """

    def __init__(self, chat: ChatModel, temperature: float = 0.2):
        self.chat = chat
        self.temperature = temperature

    def classify(self, question: str) -> Optional[Tone]:
        """Return the message tone, or None if the model replied with an unknown label."""
        raw = self.chat.complete(TONE_PROMPT.format(message=question), self.temperature)
        label = (raw or "").strip().strip('".').lower()
        logger.info(f"Detected tone: {label!r}")
        if label not in TONES:
            return None
        return cast(Tone, label)

    def route(self, question: str) -> Optional[str]:
        tone = self.classify(question)
        if tone is None:
            return UNRECOGNIZED_REPLY
        if tone == "topic":
            return None
        return CANNED_REPLIES[tone]
