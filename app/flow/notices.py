"""Transient user-facing notices"""
import logging
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    text: str
    long: bool = False


NoticeListener = Callable[[Notice], None]


class NoticeBoard:
    """
    Hands short-lived messages to whoever displays them.
    Nothing is kept once the listeners have been called.
    """

    def __init__(self):
        self._listeners: List[NoticeListener] = []

    def subscribe(self, listener: NoticeListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def show(self, text: str, long: bool = False) -> Notice:
        notice = Notice(text, long)
        logger.debug(f"Notice: {text}")
        for listener in list(self._listeners):
            listener(notice)
        return notice
