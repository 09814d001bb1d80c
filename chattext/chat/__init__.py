"""Chat delivery: line log, dispatcher and archive."""

from chattext.chat.archive import MessageArchive
from chattext.chat.dispatcher import ChatDispatcher
from chattext.chat.log import ChatLine, ChatLog

__all__ = ["ChatDispatcher", "ChatLine", "ChatLog", "MessageArchive"]
