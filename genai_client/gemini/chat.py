"""Multi-turn conversations on top of :class:`GenerativeModel`."""
from __future__ import annotations

import copy
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..base.cancellation import CallContext
from ..base.models import ROLE_MODEL, Candidate, Content, GenerateContentResponse, Part
from ..base.streaming import GenerateContentResponseIterator
from .client import new_user_content

if TYPE_CHECKING:
    from .client import GenerativeModel


class _TurnRecorder:
    """Appends one user turn and its reply to a session's history."""

    def __init__(self, session: "ChatSession", user: Content) -> None:
        self._session = session
        self._user = user
        self._recorded = False

    def add_to_history(self, candidates: List[Candidate]) -> None:
        if self._recorded:
            return
        self._recorded = True
        turn = [self._user]
        if candidates and candidates[0].content is not None:
            reply = copy.deepcopy(candidates[0].content)
            reply.role = ROLE_MODEL
            turn.append(reply)
        self._session.history.extend(turn)


class ChatSession:
    """A conversation with a model.

    ``history`` holds the turns exchanged so far and is sent with every new
    message. A turn is recorded only after its call succeeds (or its stream
    ends cleanly); failed, blocked or abandoned calls leave it unchanged.

    A session is single-writer: do not send messages on it concurrently.
    """

    def __init__(self, model: "GenerativeModel", history: Optional[Sequence[Content]] = None) -> None:
        self.model = model
        self.history: List[Content] = list(history or [])

    def send_message(self, *parts: "Part | str", ctx: Optional[CallContext] = None) -> GenerateContentResponse:
        user = new_user_content(parts)
        response = self.model._generate([*self.history, user], ctx)
        _TurnRecorder(self, user).add_to_history(response.candidates)
        return response

    def send_message_stream(
        self,
        *parts: "Part | str",
        ctx: Optional[CallContext] = None,
        keep_partial: bool = False,
    ) -> GenerateContentResponseIterator:
        user = new_user_content(parts)
        return self.model._generate_stream(
            [*self.history, user],
            ctx,
            history=_TurnRecorder(self, user),
            keep_partial=keep_partial,
        )


__all__ = ["ChatSession"]
