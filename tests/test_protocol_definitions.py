#!/usr/bin/env python3
"""
Unit tests for the envelope codec in common/protocol_definitions.py

Covers:
- Encoding of every envelope type
- Decoding back to identical envelopes
- Chat bodies containing the delimiter
- Rejection of malformed payloads
"""

import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.protocol_definitions import (
    ChatMessage, DirectoryEntry, DirectoryRequest, GroupAddress, Join, Leave,
    MalformedEnvelopeError, decode, encode, format_chat_line
)


class TestEncode(unittest.TestCase):
    """Wire text produced for each envelope."""

    def test_encode_join(self):
        self.assertEqual(encode(Join("alice")), "JOIN:alice")

    def test_encode_leave(self):
        self.assertEqual(encode(Leave("alice")), "LEAVE:alice")

    def test_encode_chat_message(self):
        self.assertEqual(encode(ChatMessage("alice", "hi")), "MESSAGE:alice:hi")

    def test_encode_directory_request(self):
        self.assertEqual(encode(DirectoryRequest("alice")), "REQUEST_USER_LIST:alice")

    def test_encode_directory_entry(self):
        self.assertEqual(encode(DirectoryEntry("alice", "bob")), "USER_LIST:alice:bob")

    def test_encode_rejects_unknown_object(self):
        with self.assertRaises(TypeError):
            encode("JOIN:alice")


class TestDecode(unittest.TestCase):
    """Parsing of wire text."""

    def test_round_trip_every_envelope(self):
        """decode(encode(e)) == e for each envelope type."""
        envelopes = [
            Join("alice"),
            Leave("bob"),
            ChatMessage("alice", "hello there"),
            ChatMessage("alice", ""),
            DirectoryRequest("carol"),
            DirectoryEntry("carol", "dave"),
        ]
        for envelope in envelopes:
            with self.subTest(envelope=envelope):
                self.assertEqual(decode(encode(envelope)), envelope)

    def test_chat_body_keeps_delimiters(self):
        """Only the first two delimiters split the payload."""
        message = decode("MESSAGE:alice:see you at 10:30: ok?")
        self.assertEqual(message, ChatMessage("alice", "see you at 10:30: ok?"))

    def test_chat_body_with_delimiter_round_trips(self):
        message = ChatMessage("alice", "a:b:c")
        self.assertEqual(decode(encode(message)), message)

    def test_single_argument_verb_ignores_extra_field(self):
        self.assertEqual(decode("JOIN:alice:extra"), Join("alice"))

    def test_user_list_peer_keeps_remaining_text(self):
        self.assertEqual(decode("USER_LIST:alice:bob:x"), DirectoryEntry("alice", "bob:x"))

    def test_garbage_is_malformed(self):
        """A single field without delimiter is rejected."""
        with self.assertRaises(MalformedEnvelopeError) as ctx:
            decode("GARBAGE")
        self.assertEqual(ctx.exception.payload, "GARBAGE")

    def test_empty_payload_is_malformed(self):
        with self.assertRaises(MalformedEnvelopeError):
            decode("")

    def test_unknown_verb_is_malformed(self):
        with self.assertRaises(MalformedEnvelopeError) as ctx:
            decode("PING:alice")
        self.assertIn("PING", ctx.exception.reason)

    def test_verbs_are_case_sensitive(self):
        with self.assertRaises(MalformedEnvelopeError):
            decode("join:alice")

    def test_message_without_body_is_malformed(self):
        with self.assertRaises(MalformedEnvelopeError):
            decode("MESSAGE:alice")

    def test_user_list_without_peer_is_malformed(self):
        with self.assertRaises(MalformedEnvelopeError):
            decode("USER_LIST:alice")

    def test_empty_identifier_is_malformed(self):
        for payload in ("JOIN:", "LEAVE:", "REQUEST_USER_LIST:", "MESSAGE::hi", "USER_LIST:alice:"):
            with self.subTest(payload=payload):
                with self.assertRaises(MalformedEnvelopeError):
                    decode(payload)

    def test_malformed_error_is_value_error(self):
        self.assertTrue(issubclass(MalformedEnvelopeError, ValueError))

    def test_oversized_payload_is_parsed(self):
        body = "x" * 5000
        self.assertEqual(decode("MESSAGE:alice:" + body), ChatMessage("alice", body))


class TestHelpers(unittest.TestCase):
    """Formatting and address helpers."""

    def test_format_chat_line(self):
        self.assertEqual(format_chat_line(ChatMessage("alice", "hi")), "alice: hi")

    def test_group_address_tuple(self):
        self.assertEqual(GroupAddress("230.0.0.0", 4446).as_tuple(), ("230.0.0.0", 4446))

    def test_envelopes_are_immutable(self):
        join = Join("alice")
        with self.assertRaises(AttributeError):
            join.peer = "bob"

    def test_empty_identifier_rejected_at_construction(self):
        """Only envelopes that decode again can be built."""
        for build in (lambda: Join(""), lambda: Leave(""), lambda: ChatMessage("", "hi"),
                      lambda: DirectoryRequest(""), lambda: DirectoryEntry("", "bob"),
                      lambda: DirectoryEntry("alice", "")):
            with self.assertRaises(ValueError):
                build()
        # An empty body is still a valid chat message
        self.assertEqual(decode(encode(ChatMessage("alice", ""))), ChatMessage("alice", ""))


if __name__ == '__main__':
    unittest.main()
