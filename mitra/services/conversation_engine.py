"""Conversation session for the city guide chat.

States:
- IDLE     ready for the next message
- SENDING  a turn is being classified and answered; further sends are refused

Each turn appends the user's message and exactly one bot message, whether the
turn succeeds or fails. With a signed-in user every message is also written to
that user's history; without one, history lives only in this object.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional

from mitra.config.settings import WELCOME_MESSAGE
from mitra.services.intent_classifier import ClassificationError, ClassifiedIntent, GenerativeIntentClassifier
from mitra.services.models import BOT, USER, BotResponse, ConversationMessage, TextResponse
from mitra.services.orchestrator import ResponseOrchestrator
from mitra.store.base import StoreError
from mitra.store.repository import HistoryRepository

logger = logging.getLogger(__name__)

TIMESTAMP_STEP = 0.001


class ConversationState(Enum):
    IDLE = auto()
    SENDING = auto()


class TurnInProgress(RuntimeError):
    """A message was sent while the previous turn was still running."""


@dataclass
class AgentTurn:
    user_message: ConversationMessage
    bot_message: ConversationMessage
    intent: Optional[ClassifiedIntent] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def error_text(exc: Exception) -> str:
    return f"Sorry, something went wrong: {exc}. Please try again."


class ConversationSession:
    """Sequences send → classify → respond → append for one conversation."""

    def __init__(
        self,
        classifier: GenerativeIntentClassifier,
        orchestrator: ResponseOrchestrator,
        history: HistoryRepository,
        user_id: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.state = ConversationState.IDLE
        self.messages: List[ConversationMessage] = []
        self._classifier = classifier
        self._orchestrator = orchestrator
        self._history = history
        self._clock = clock
        self.user_id: Optional[str] = None
        self.attach_user(user_id)

    # Public API ---------------------------------------------------------
    @property
    def can_send(self) -> bool:
        return self.state is ConversationState.IDLE

    def attach_user(self, user_id: Optional[str]) -> List[ConversationMessage]:
        """Switch to a user's stored history, or to in-memory history when None."""
        self.user_id = user_id or None
        if self.user_id is None:
            self.messages = []
            self._append(BOT, TextResponse(content=WELCOME_MESSAGE))
            return self.messages
        return self.load()

    def load(self) -> List[ConversationMessage]:
        """Reload the signed-in user's history, seeding the welcome message if it is empty."""
        if self.user_id is None:
            return self.messages
        self.messages = self._history.load(self.user_id)
        if not self.messages:
            self._append(BOT, TextResponse(content=WELCOME_MESSAGE))
        return self.messages

    def send(self, text: str) -> Optional[AgentTurn]:
        """Run one turn. Blank input is ignored and returns None."""
        user_text = (text or "").strip()
        if not user_text:
            return None
        if self.state is not ConversationState.IDLE:
            raise TurnInProgress("Please wait for the current reply before sending another message.")

        self.state = ConversationState.SENDING
        try:
            user_message = self._append(USER, TextResponse(content=user_text))
            intent: Optional[ClassifiedIntent] = None
            try:
                intent = self._classifier.classify(user_text)
                response = self._orchestrator.respond(intent, self.user_id)
            except ClassificationError as exc:
                logger.error("Classification failed for %r: %s", user_text, exc)
                bot_message = self._append(BOT, TextResponse(content=error_text(exc)))
                return AgentTurn(user_message, bot_message, intent=None, error=str(exc))
            except Exception as exc:
                logger.exception("Turn failed for %r", user_text)
                bot_message = self._append(BOT, TextResponse(content=error_text(exc)))
                return AgentTurn(user_message, bot_message, intent=intent, error=str(exc))
            bot_message = self._append(BOT, response)
            return AgentTurn(user_message, bot_message, intent=intent)
        finally:
            self.state = ConversationState.IDLE

    def clear(self) -> List[ConversationMessage]:
        """Drop all messages and start again from the welcome message."""
        if self.user_id is not None:
            self._history.clear(self.user_id)
        self.messages = []
        self._append(BOT, TextResponse(content=WELCOME_MESSAGE))
        return self.messages

    @property
    def is_fresh(self) -> bool:
        """True while only the welcome message is shown."""
        return len(self.messages) <= 1 and all(m.sender == BOT for m in self.messages)

    # Helpers -------------------------------------------------------------
    def _next_timestamp(self) -> float:
        # Strictly increasing so stored history sorts back into send order.
        now = self._clock()
        if self.messages and self.messages[-1].timestamp >= now:
            return self.messages[-1].timestamp + TIMESTAMP_STEP
        return now

    def _append(self, sender: str, response: BotResponse) -> ConversationMessage:
        message = ConversationMessage(sender=sender, response=response, timestamp=self._next_timestamp())
        self.messages.append(message)
        if self.user_id is not None:
            try:
                self._history.append(self.user_id, message)
            except StoreError:
                # Kept on screen even when the write fails.
                logger.exception("Could not persist %s message for user %s", sender, self.user_id)
        return message


__all__ = ["AgentTurn", "ConversationSession", "ConversationState", "TurnInProgress", "error_text"]
