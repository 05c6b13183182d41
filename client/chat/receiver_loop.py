"""
Receiver loop module.

This module runs the background thread that reads datagrams from the group,
decodes them and applies them to the local directory and the observer.
"""

import threading
from enum import Enum
from typing import FrozenSet, Optional

from client.network.group_transport import TransportClosedError
from client.presence.directory import Directory
from client.utils.logger import logger
from common.protocol_definitions import (
    ChatMessage, DirectoryEntry, DirectoryRequest, Join, Leave, MalformedEnvelopeError,
    create_user_list_entry, decode, encode, format_chat_line
)


class PresenceObserver:
    """Callbacks the chat core invokes on the user interface. Defaults do nothing."""

    def on_chat_line(self, text: str):
        pass

    def on_directory_changed(self, peers: FrozenSet[str]):
        pass


class ReceiverState(Enum):
    RUNNING = 'running'
    STOPPED = 'stopped'


class ReceiverLoop:
    """Background loop: receive, decode, dispatch."""

    def __init__(self, transport, directory: Directory, observer: Optional[PresenceObserver] = None):
        self.transport = transport
        self.directory = directory
        self.observer = observer or PresenceObserver()
        self.state = ReceiverState.RUNNING
        self.thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self.state is ReceiverState.RUNNING

    def start(self):
        """Start the receiver thread."""
        self.thread = threading.Thread(target=self.run, name='multicast-receiver', daemon=True)
        self.thread.start()

    def stop(self):
        """Request the loop to stop. The transport must be closed to unblock it."""
        self.state = ReceiverState.STOPPED

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the receiver thread. Returns True if it has exited."""
        if self.thread is None:
            return True
        if self.thread is threading.current_thread():
            return False
        self.thread.join(timeout)
        return not self.thread.is_alive()

    def run(self):
        """Main receive loop."""
        while self.running:
            try:
                payload = self.transport.receive()
            except (TransportClosedError, OSError) as e:
                # The flag, not the exception type, tells a shutdown from a failure
                if self.running:
                    logger.log_error("receiving packet", e)
                else:
                    logger.info("Socket closed, stopping receiver thread.")
                break

            if not self.running:
                break

            try:
                self.handle_datagram(payload)
            except Exception as e:
                logger.log_error("processing message", e)

    def handle_datagram(self, payload: str):
        """Decode one datagram and apply it."""
        logger.log_packet_received(payload)
        try:
            envelope = decode(payload)
        except MalformedEnvelopeError as e:
            logger.log_malformed(payload, e.reason)
            return

        if isinstance(envelope, Join):
            self._handle_join(envelope)
        elif isinstance(envelope, Leave):
            self._handle_leave(envelope)
        elif isinstance(envelope, ChatMessage):
            self.observer.on_chat_line(format_chat_line(envelope))
        elif isinstance(envelope, DirectoryRequest):
            self._handle_directory_request(envelope)
        elif isinstance(envelope, DirectoryEntry):
            self._handle_directory_entry(envelope)

    def _handle_join(self, envelope: Join):
        self.directory.add(envelope.peer)
        self.observer.on_chat_line(f"{envelope.peer} has joined the chat.")
        self.observer.on_directory_changed(self.directory.snapshot())

    def _handle_leave(self, envelope: Leave):
        self.directory.remove(envelope.peer)
        self.observer.on_chat_line(f"{envelope.peer} has left the chat.")
        self.observer.on_directory_changed(self.directory.snapshot())

    def _handle_directory_request(self, envelope: DirectoryRequest):
        # Every member is re-announced to the whole group, one datagram each
        for peer in self.directory.snapshot():
            self.transport.send(encode(create_user_list_entry(envelope.requester, peer)))

    def _handle_directory_entry(self, envelope: DirectoryEntry):
        if self.directory.add(envelope.peer):
            self.observer.on_directory_changed(self.directory.snapshot())
