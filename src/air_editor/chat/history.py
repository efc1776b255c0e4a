"""Chat transcript model shared between the UI loop and the chat bridge."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, replace
from typing import Iterator, List, Literal, Optional, Tuple

Role = Literal["user", "model"]

PENDING_CONTENT = "..."


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Role
    content: str
    request_id: Optional[int] = None
    pending: bool = False
    error: bool = False

    @property
    def completed_response(self) -> bool:
        return self.role == "model" and not self.pending


class ChatHistory:
    """Append-only transcript; pending entries are replaced, never appended to.

    Each pending placeholder carries its own ``request_id`` so a late reply
    always lands on the placeholder of the request that produced it, no
    matter how many other requests were submitted in between.
    """

    def __init__(self) -> None:
        self._messages: List[ChatMessage] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> ChatMessage:
        return self._messages[index]

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def add_user(self, content: str) -> ChatMessage:
        message = ChatMessage(role="user", content=content)
        self._messages.append(message)
        return message

    def new_request_id(self) -> int:
        return next(self._ids)

    def add_placeholder(self, request_id: Optional[int] = None) -> ChatMessage:
        message = ChatMessage(
            role="model",
            content=PENDING_CONTENT,
            request_id=self.new_request_id() if request_id is None else request_id,
            pending=True,
        )
        self._messages.append(message)
        return message

    def resolve(self, request_id: int, content: str, *, error: bool = False) -> bool:
        """Replace the placeholder for ``request_id``; False if none is pending."""

        for index, message in enumerate(self._messages):
            if message.pending and message.request_id == request_id:
                self._messages[index] = replace(
                    message, content=content, pending=False, error=error
                )
                return True
        return False

    def completed(self) -> List[ChatMessage]:
        """Every message except in-flight placeholders, in order."""

        return [message for message in self._messages if not message.pending]

    def responses(self) -> List[ChatMessage]:
        return [message for message in self._messages if message.completed_response]

    def response(self, number: int) -> Optional[ChatMessage]:
        """Return the 1-indexed ``number``-th completed model response."""

        responses = self.responses()
        if 1 <= number <= len(responses):
            return responses[number - 1]
        return None

    def last_response(self) -> Optional[ChatMessage]:
        responses = self.responses()
        return responses[-1] if responses else None

    def pending_count(self) -> int:
        return sum(1 for message in self._messages if message.pending)

    def transcript(self) -> str:
        """Plain-text rendering used by the copy-selection override."""

        lines: List[str] = []
        number = 0
        for message in self._messages:
            if message.role == "user":
                lines.append(f"You: {message.content}")
            elif message.pending:
                lines.append(f"AI: {message.content}")
            else:
                number += 1
                lines.append(f"AI #{number}: {message.content}")
        return "\n".join(lines)


__all__ = ["ChatHistory", "ChatMessage", "PENDING_CONTENT", "Role"]
