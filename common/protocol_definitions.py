"""
Protocol definitions for the LAN Multicast Chat.

This module defines the envelopes exchanged over the multicast group and the
text codec that turns them into datagram payloads and back.

Wire format: ``VERB:arg1[:arg2]``. A payload is split on at most the first two
delimiters, so a chat body may itself contain ``:``.
"""

from dataclasses import dataclass
from typing import Union

from common.constants import MessageTypes, DELIMITER, MAX_FIELDS


class MalformedEnvelopeError(ValueError):
    """Raised when a payload cannot be decoded into an envelope."""

    def __init__(self, payload: str, reason: str):
        super().__init__(f"{reason}: {payload!r}")
        self.payload = payload
        self.reason = reason


@dataclass(frozen=True)
class GroupAddress:
    """Multicast group shared by every peer of one deployment."""
    host: str
    port: int

    def as_tuple(self):
        return (self.host, self.port)


@dataclass(frozen=True)
class Envelope:
    """Base class for all protocol messages.

    Identifier fields must be non-empty; an empty one could not be decoded again.
    """
    _identifiers = ()

    def __post_init__(self):
        for name in self._identifiers:
            if not getattr(self, name):
                raise ValueError(f"{type(self).__name__}.{name} must not be empty")


@dataclass(frozen=True)
class Join(Envelope):
    """Peer announces presence."""
    peer: str
    _identifiers = ('peer',)


@dataclass(frozen=True)
class Leave(Envelope):
    """Peer announces departure."""
    peer: str
    _identifiers = ('peer',)


@dataclass(frozen=True)
class ChatMessage(Envelope):
    """Chat text from a peer."""
    sender: str
    body: str
    _identifiers = ('sender',)


@dataclass(frozen=True)
class DirectoryRequest(Envelope):
    """Requester asks every peer to report the members it knows."""
    requester: str
    _identifiers = ('requester',)


@dataclass(frozen=True)
class DirectoryEntry(Envelope):
    """One known member, reported in answer to a request.

    ``requester`` is a text field only; the datagram still goes to the whole group.
    """
    requester: str
    peer: str
    _identifiers = ('requester', 'peer')


EnvelopeType = Union[Join, Leave, ChatMessage, DirectoryRequest, DirectoryEntry]


def create_join_message(peer: str) -> Join:
    """Create a join envelope."""
    return Join(peer)


def create_leave_message(peer: str) -> Leave:
    """Create a leave envelope."""
    return Leave(peer)


def create_chat_message(sender: str, body: str) -> ChatMessage:
    """Create a chat envelope."""
    return ChatMessage(sender, body)


def create_user_list_request(requester: str) -> DirectoryRequest:
    """Create a directory request envelope."""
    return DirectoryRequest(requester)


def create_user_list_entry(requester: str, peer: str) -> DirectoryEntry:
    """Create a directory entry envelope."""
    return DirectoryEntry(requester, peer)


def encode(envelope: Envelope) -> str:
    """Encode an envelope into its wire text."""
    if isinstance(envelope, Join):
        fields = [MessageTypes.JOIN, envelope.peer]
    elif isinstance(envelope, Leave):
        fields = [MessageTypes.LEAVE, envelope.peer]
    elif isinstance(envelope, ChatMessage):
        fields = [MessageTypes.MESSAGE, envelope.sender, envelope.body]
    elif isinstance(envelope, DirectoryRequest):
        fields = [MessageTypes.REQUEST_USER_LIST, envelope.requester]
    elif isinstance(envelope, DirectoryEntry):
        fields = [MessageTypes.USER_LIST, envelope.requester, envelope.peer]
    else:
        raise TypeError(f"Cannot encode {type(envelope).__name__}")
    return DELIMITER.join(fields)


def decode(payload: str) -> EnvelopeType:
    """
    Decode wire text into an envelope.

    Args:
        payload: Datagram text

    Returns:
        The decoded envelope

    Raises:
        MalformedEnvelopeError: Too few fields, unknown verb, or an empty identifier
    """
    parts = payload.split(DELIMITER, MAX_FIELDS - 1)
    if len(parts) < 2:
        raise MalformedEnvelopeError(payload, "too few fields")

    verb = parts[0]
    if verb == MessageTypes.JOIN:
        return Join(_identifier(payload, parts[1]))
    if verb == MessageTypes.LEAVE:
        return Leave(_identifier(payload, parts[1]))
    if verb == MessageTypes.REQUEST_USER_LIST:
        return DirectoryRequest(_identifier(payload, parts[1]))
    if verb == MessageTypes.MESSAGE:
        if len(parts) < 3:
            raise MalformedEnvelopeError(payload, "chat message without body")
        return ChatMessage(_identifier(payload, parts[1]), parts[2])
    if verb == MessageTypes.USER_LIST:
        if len(parts) < 3:
            raise MalformedEnvelopeError(payload, "user list entry without peer")
        return DirectoryEntry(_identifier(payload, parts[1]), _identifier(payload, parts[2]))
    raise MalformedEnvelopeError(payload, f"unknown message type {verb!r}")


def _identifier(payload: str, value: str) -> str:
    if not value:
        raise MalformedEnvelopeError(payload, "empty identifier")
    return value


def format_chat_line(message: ChatMessage) -> str:
    """Render a chat message the way it appears in a transcript."""
    return f"{message.sender}: {message.body}"
