"""
Multicast group transport.

This module owns the UDP multicast socket shared by the application thread
(which sends and eventually closes it) and the receiver thread (which blocks
reading from it).
"""

import socket
import struct
import threading
from typing import Optional

from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import ENCODING
from common.protocol_definitions import GroupAddress


class FatalSetupError(ConnectionError):
    """Raised when the multicast socket cannot be bound or the group cannot be joined."""


class TransportClosedError(ConnectionError):
    """Raised by receive() once the transport has been closed."""


class GroupTransport:
    """UDP socket joined to a multicast group."""

    def __init__(self, sock: socket.socket, group: GroupAddress, config: ClientConfig):
        self.socket = sock
        self.group = group
        self.config = config
        self.buffer_size = config.buffer_size
        self._closed = False
        self._lock = threading.Lock()

    @classmethod
    def open(cls, group: GroupAddress, config: Optional[ClientConfig] = None) -> 'GroupTransport':
        """
        Bind to the group port and join the multicast group.

        Args:
            group: Multicast address and port
            config: Socket settings (TTL, interface, buffer, poll interval)

        Returns:
            An open transport

        Raises:
            FatalSetupError: The socket could not be created, bound or joined
        """
        config = config or ClientConfig(group.host, group.port)
        sock = None
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if hasattr(socket, 'SO_REUSEPORT'):
                # Lets several peers run on one host
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
            sock.bind(('', group.port))

            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, config.ttl)
            # Loopback must stay on: a peer sees its own chat lines only via the group
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_LOOP, 1)
            interface = socket.inet_aton(config.interface)
            if interface != socket.inet_aton('0.0.0.0'):
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_IF, interface)

            sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, cls._membership(group, config))
            sock.settimeout(config.poll_interval)
        except OSError as e:
            logger.log_error("joining multicast group", e)
            if sock is not None:
                sock.close()
            raise FatalSetupError(f"Cannot join multicast group {group.host}:{group.port}: {e}") from e

        logger.log_group_joined(group.host, group.port, config.interface)
        return cls(sock, group, config)

    @staticmethod
    def _membership(group: GroupAddress, config: ClientConfig) -> bytes:
        return struct.pack('4s4s', socket.inet_aton(group.host), socket.inet_aton(config.interface))

    @property
    def is_closed(self) -> bool:
        return self._closed

    def send(self, payload: str):
        """Send one datagram to the group. Failures are logged, never raised."""
        with self._lock:
            if self._closed:
                logger.warning(f"Socket is closed, unable to send packet: {payload}")
                return
            try:
                self.socket.sendto(payload.encode(ENCODING), self.group.as_tuple())
            except OSError as e:
                logger.log_error("sending packet", e)
                return
        logger.log_packet_sent(payload)

    def receive(self) -> str:
        """
        Block until a datagram arrives.

        Datagrams longer than the buffer are truncated.

        Raises:
            TransportClosedError: The transport was closed, before or during the call
            OSError: Any other socket failure
        """
        while True:
            if self._closed:
                raise TransportClosedError("transport closed")
            try:
                data, _addr = self.socket.recvfrom(self.buffer_size)
            except socket.timeout:
                continue
            except OSError:
                if self._closed:
                    raise TransportClosedError("transport closed") from None
                raise
            return data.decode(ENCODING, errors='replace')

    def leave(self):
        """Leave the multicast group and close the socket. Sends nothing."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self.socket.setsockopt(socket.IPPROTO_IP, socket.IP_DROP_MEMBERSHIP,
                                       self._membership(self.group, self.config))
            except OSError as e:
                logger.log_error("leaving group", e)
            self.socket.close()
        logger.log_group_left(self.group.host, self.group.port)
