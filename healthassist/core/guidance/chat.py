"""
Health Chat Responder

Keyword-matched canned guidance for the assistant chat box. The first
matching topic wins; anything else gets a general advisory.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from healthassist.core.validation import require_text
from healthassist.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChatTopic:
    name: str
    keywords: Tuple[str, ...]
    response: str


CHAT_TOPICS: Tuple[ChatTopic, ...] = (
    ChatTopic("headache", ("headache", "head pain"), (
        "Headaches can have various causes. Common ones include tension, dehydration, or lack of sleep. "
        "Try resting in a quiet, dark room, staying hydrated, and applying a cold compress. If your headache "
        "is severe, persistent, or accompanied by other symptoms like vision changes or fever, please consult "
        "a healthcare provider immediately."
    )),
    ChatTopic("fever", ("fever", "temperature"), (
        "A fever is usually a sign that your body is fighting an infection. For adults, a temperature above "
        "100.4°F (38°C) is considered a fever. Stay hydrated, rest, and you can take over-the-counter "
        "medications like acetaminophen or ibuprofen (if not contraindicated). If your fever is above 103°F, "
        "persists for more than 3 days, or is accompanied by severe symptoms, seek medical attention."
    )),
    ChatTopic("cough", ("cough", "coughing"), (
        "Coughs can be caused by infections, allergies, or irritants. Stay hydrated, use a humidifier, and "
        "consider honey (for adults) or cough drops. If your cough persists for more than 2 weeks, is "
        "accompanied by blood, chest pain, or difficulty breathing, please see a healthcare provider."
    )),
    ChatTopic("pain", ("pain", "hurt"), (
        "Pain can indicate various conditions. For mild pain, rest, ice/heat therapy, and over-the-counter "
        "pain relievers may help. However, if you experience severe pain, pain that doesn't improve, or pain "
        "accompanied by other concerning symptoms, it's important to consult with a healthcare professional "
        "for proper evaluation."
    )),
    ChatTopic("appointment", ("appointment", "doctor"), (
        "I can help you find a doctor! You can use the \"Find Doctors\" section to search for healthcare "
        "providers by specialty and location. Based on your symptoms, I can also recommend which type of "
        "specialist might be most appropriate for your needs."
    )),
    ChatTopic("emergency", ("emergency", "urgent"), (
        "If you're experiencing a medical emergency with symptoms like chest pain, difficulty breathing, "
        "severe injury, or signs of stroke, please call emergency services (108 in India) immediately. For "
        "urgent but non-life-threatening concerns, you can visit an urgent care center or contact your "
        "healthcare provider."
    )),
)

FALLBACK_RESPONSE = (
    "Thank you for sharing that information. While I can provide general health guidance, I'm not a "
    "replacement for professional medical advice. For specific concerns, persistent symptoms, or if you're "
    "unsure about your condition, I recommend consulting with a qualified healthcare provider. Would you like "
    "me to help you find a doctor or provide more information about a specific symptom?"
)


@dataclass(frozen=True)
class ChatReply:
    topic: Optional[str]
    response: str

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"topic": self.topic, "response": self.response}


class HealthChatResponder:
    """Answers a chat message with the first matching canned response."""

    def __init__(self, topics: Tuple[ChatTopic, ...] = CHAT_TOPICS, fallback: str = FALLBACK_RESPONSE):
        self.topics = topics
        self.fallback = fallback

    def reply(self, message: str) -> ChatReply:
        text = require_text(message, "message", "Please enter a message").lower()
        for topic in self.topics:
            if any(k in text for k in topic.keywords):
                logger.debug(f"Chat topic matched: {topic.name}")
                return ChatReply(topic.name, topic.response)
        return ChatReply(None, self.fallback)
