"""Payload skeletons for Telegram Bot API objects.

Each fragment is a function returning a fresh skeleton: a dict whose leaves
are literals or placeholder strings (``"id:7"``, ``"random_int:1:9"``)
that the resolver replaces with generated values.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from tgfake.exceptions import UnknownFragmentError

Skeleton = dict[str, Any]


def update() -> Skeleton:
    # message, callback_query etc. are merged in by the scenario builders
    return {"update_id": "id"}


def user() -> Skeleton:
    return {
        "id": "id",
        "is_bot": False,
        "first_name": "first_name",
        "username": "user_name",
        "can_join_groups": True,
        "can_read_all_group_messages": False,
        "supports_inline_queries": False,
    }


def sender() -> Skeleton:
    return {
        "id": "id",
        "is_bot": False,
        "first_name": "first_name",
        "last_name": "last_name",
        "username": "user_name",
        "language_code": "language_code",
    }


def bot_user() -> Skeleton:
    return {
        "id": "id",
        "is_bot": True,
        "first_name": "bot_name",
        "username": "bot_user_name",
    }


def chat() -> Skeleton:
    return {
        "id": "id",
        "first_name": "first_name",
        "last_name": "last_name",
        "username": "user_name",
        "type": "private",
    }


def message() -> Skeleton:
    return {
        "message_id": "id:7",
        "from": sender(),
        "chat": chat(),
        "date": "timestamp",
        "text": "sentence",
        "entities": [],
    }


def callback_query() -> Skeleton:
    return {
        "id": "string_id:16",
        "from": sender(),
        "message": message(),
        "chat_instance": "string_id",
        "data": "word",
    }


def photo() -> Skeleton:
    return {
        "file_id": "file_id:36",
        "file_unique_id": "file_id:16",
        "width": "random_int:100:1000",
        "height": "random_int:100:1000",
        "file_size": "random_int:10000:5000000",
    }


def document() -> Skeleton:
    return {
        "file_id": "file_id:36",
        "file_unique_id": "file_id:16",
        "file_name": "file_name:office",
        "mime_type": "mime_type",
        "file_size": "random_int:10000:10000000",
    }


FRAGMENTS: dict[str, Callable[[], Skeleton]] = {
    "update": update,
    "user": user,
    "sender": sender,
    "bot_user": bot_user,
    "chat": chat,
    "message": message,
    "callback_query": callback_query,
    "photo": photo,
    "document": document,
}


def fragment(name: str) -> Skeleton:
    try:
        return FRAGMENTS[name]()
    except KeyError:
        raise UnknownFragmentError(f"Unknown payload fragment {name!r}") from None
