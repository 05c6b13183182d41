"""
Presence controller module.

This module is the facade the user interfaces call: it sequences joining the
group, requesting the member list, sending chat and leaving.
"""

import threading
from typing import Callable, FrozenSet, Optional

from client.chat.receiver_loop import PresenceObserver, ReceiverLoop
from client.network.group_transport import GroupTransport
from client.presence.directory import Directory
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.protocol_definitions import (
    create_chat_message, create_join_message, create_leave_message, create_user_list_request,
    encode
)


class PresenceController:
    """Start, chat and stop one multicast chat session."""

    def __init__(self, config: Optional[ClientConfig] = None,
                 observer: Optional[PresenceObserver] = None,
                 transport_factory: Callable = GroupTransport.open):
        self.config = config or ClientConfig()
        self.observer = observer or PresenceObserver()
        self.transport_factory = transport_factory
        self.directory = Directory()
        self.transport = None
        self.receiver: Optional[ReceiverLoop] = None
        self.peer_id: Optional[str] = None
        self.started = False
        self.stopped = False
        self._lock = threading.Lock()

    @property
    def is_active(self) -> bool:
        return self.started and not self.stopped

    def users(self) -> FrozenSet[str]:
        """Snapshot of the peers believed present."""
        return self.directory.snapshot()

    def start(self, peer_id: str):
        """
        Join the group and announce ourselves.

        Args:
            peer_id: Identifier chosen by the user

        Raises:
            ValueError: Blank identifier
            RuntimeError: Session already started
            FatalSetupError: The multicast group cannot be joined
        """
        if not peer_id or not peer_id.strip():
            raise ValueError("peer id must not be empty")
        if self.started:
            raise RuntimeError("session already started")

        self.transport = self.transport_factory(self.config.get_group_address(), self.config)
        self.peer_id = peer_id
        self.config.username = peer_id
        self.started = True

        self.receiver = ReceiverLoop(self.transport, self.directory, self.observer)
        self.receiver.start()

        logger.log_session(peer_id, "Joining chat")
        self.directory.add(peer_id)
        self.observer.on_directory_changed(self.directory.snapshot())
        # Join goes out before the request so repliers already know the newcomer
        self.transport.send(encode(create_join_message(peer_id)))
        self.transport.send(encode(create_user_list_request(peer_id)))

    def send_chat(self, body: str):
        """Send a chat line. It shows up locally only when the group loops it back."""
        if not self.is_active:
            logger.debug("Chat session not active, message dropped")
            return
        self.transport.send(encode(create_chat_message(self.peer_id, body)))

    def stop(self):
        """Announce departure and leave the group. Safe to call more than once."""
        with self._lock:
            if not self.is_active:
                return
            self.stopped = True

        self.receiver.stop()
        self.transport.send(encode(create_leave_message(self.peer_id)))
        self.transport.leave()

        # A datagram already being dispatched could re-add us, so wait it out first
        if not self.receiver.join(self.config.join_timeout):
            if self.receiver.thread is not threading.current_thread():
                logger.warning("Receiver thread did not exit in time")

        self.directory.remove(self.peer_id)
        self.observer.on_directory_changed(self.directory.snapshot())
        logger.log_session(self.peer_id, "Left chat")
