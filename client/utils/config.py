"""
Client configuration module.

This module handles client-side configuration settings.
"""

from typing import Optional

from common.constants import (
    DEFAULT_MULTICAST_GROUP, DEFAULT_PORT, DEFAULT_INTERFACE, MULTICAST_TTL,
    BUFFER_SIZE, SOCKET_POLL_INTERVAL, RECEIVER_JOIN_TIMEOUT
)
from common.protocol_definitions import GroupAddress


class ClientConfig:
    """Client configuration class."""

    def __init__(self, group_host: str = DEFAULT_MULTICAST_GROUP, port: int = DEFAULT_PORT,
                 username: Optional[str] = None, interface: str = DEFAULT_INTERFACE):
        self.group_host = group_host
        self.port = port
        self.username = username
        self.interface = interface

        # Socket settings
        self.ttl = MULTICAST_TTL
        self.buffer_size = BUFFER_SIZE
        self.poll_interval = SOCKET_POLL_INTERVAL

        # Shutdown settings
        self.join_timeout = RECEIVER_JOIN_TIMEOUT

    def get_group_address(self) -> GroupAddress:
        """Get the multicast group address."""
        return GroupAddress(self.group_host, self.port)

    def get_connection_info(self):
        """Get connection information."""
        return {
            'group': self.group_host,
            'port': self.port,
            'interface': self.interface,
            'username': self.username
        }

    def get_socket_settings(self):
        """Get socket settings."""
        return {
            'ttl': self.ttl,
            'buffer_size': self.buffer_size,
            'poll_interval': self.poll_interval
        }
