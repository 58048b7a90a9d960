"""Screen flow: navigation state machine, notices and screen controllers"""
from app.flow.context import AppContext
from app.flow.navigation import Event, Navigator, Screen, Tab, Transition
from app.flow.notices import Notice, NoticeBoard

__all__ = [
    "AppContext",
    "Event",
    "Navigator",
    "Screen",
    "Tab",
    "Transition",
    "Notice",
    "NoticeBoard",
]
