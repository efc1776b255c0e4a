"""Background chat requests marshalled back onto the UI loop.

Workers never touch editor state. They compute a reply (or an error string)
and post a closure onto an ``UpdateQueue``; only the UI loop drains that
queue, so completions apply one at a time in arrival order and never
interleave with key handling.
"""

from __future__ import annotations

import queue
import threading
from functools import partial
from typing import Callable, List, Optional, Sequence

from air_editor.errors import ChatError
from air_editor.runtime import telemetry

from .client import ChatClient
from .history import ChatHistory, ChatMessage

Update = Callable[[], None]
Spawner = Callable[[Callable[[], None], str], None]


class UpdateQueue:
    """Thread-safe hand-off of state mutations to the single UI consumer.

    ``on_post`` runs on the posting thread after each update is queued; a host
    uses it to wake its loop instead of waiting for the next timer tick.
    """

    def __init__(self, on_post: Optional[Callable[[], None]] = None) -> None:
        self._queue: "queue.SimpleQueue[Update]" = queue.SimpleQueue()
        self.on_post = on_post

    def post(self, update: Update) -> None:
        """Enqueue ``update``; safe to call from any thread."""

        self._queue.put(update)
        if self.on_post is not None:
            self.on_post()

    def drain(self) -> int:
        """Run every queued update on the calling thread; returns the count."""

        applied = 0
        while True:
            try:
                update = self._queue.get_nowait()
            except queue.Empty:
                return applied
            update()
            applied += 1

    def empty(self) -> bool:
        return self._queue.empty()


def spawn_thread(work: Callable[[], None], name: str) -> None:
    threading.Thread(target=work, name=name, daemon=True).start()


class ChatBridge:
    """Owns the submit/complete protocol for chat messages."""

    def __init__(
        self,
        history: ChatHistory,
        client: ChatClient,
        *,
        updates: Optional[UpdateQueue] = None,
        spawn: Spawner = spawn_thread,
    ) -> None:
        self.history = history
        self.client = client
        self.updates = updates or UpdateQueue()
        self.spawn = spawn
        self._listeners: List[Callable[[ChatMessage], None]] = []
        self.logger = telemetry.get_logger("air_editor.chat")

    def subscribe(self, callback: Callable[[ChatMessage], None]) -> None:
        """Call ``callback`` on the UI loop whenever a placeholder resolves."""

        self._listeners.append(callback)

    def submit(self, text: str) -> Optional[ChatMessage]:
        """Append the user turn plus a placeholder and start the request.

        Returns the placeholder, or ``None`` for a blank message.
        """

        prompt = text.strip()
        if not prompt:
            return None
        prior = self.history.completed()
        self.history.add_user(prompt)
        request_id = self.history.new_request_id()
        placeholder = self.history.add_placeholder(request_id)
        telemetry.record_event(
            "chat.submit",
            data={"request_id": request_id, "turns": len(prior)},
            logger_name="air_editor.chat",
        )
        work = partial(self._run_request, request_id, tuple(prior), prompt)
        self.spawn(work, f"chat-request-{request_id}")
        return placeholder

    def drain(self) -> int:
        return self.updates.drain()

    def _run_request(
        self, request_id: int, prior: Sequence[ChatMessage], prompt: str
    ) -> None:
        # Runs on the worker; only the queue is shared.
        try:
            reply = self.client.generate(prior, prompt)
        except ChatError as exc:
            self.updates.post(partial(self._complete, request_id, f"Error: {exc}", True))
            return
        except Exception as exc:  # noqa: BLE001 - worker must always report back
            self.logger.error(f"chat request {request_id} crashed: {exc!r}")
            self.updates.post(partial(self._complete, request_id, f"Error: {exc}", True))
            return
        self.updates.post(partial(self._complete, request_id, reply, False))

    def _complete(self, request_id: int, content: str, error: bool) -> None:
        if not self.history.resolve(request_id, content, error=error):
            self.logger.warning(f"no pending placeholder for chat request {request_id}")
            return
        telemetry.record_event(
            "chat.complete",
            level="warning" if error else "info",
            data={"request_id": request_id, "error": error},
            logger_name="air_editor.chat",
        )
        message = next(
            m for m in self.history.messages if m.request_id == request_id
        )
        for callback in list(self._listeners):
            callback(message)


__all__ = ["ChatBridge", "UpdateQueue", "spawn_thread", "Spawner"]
