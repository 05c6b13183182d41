"""
Shared constants for the LAN Multicast Chat.

This module contains all constants used by the protocol, transport and client components.
"""

# Network Configuration
DEFAULT_MULTICAST_GROUP = '230.0.0.0'
DEFAULT_PORT = 4446
DEFAULT_INTERFACE = '0.0.0.0'  # any interface
MULTICAST_TTL = 1  # stay on the local network

# Buffer Sizes
BUFFER_SIZE = 1024  # receive buffer; longer datagrams are truncated

# Timeouts
SOCKET_POLL_INTERVAL = 0.5  # seconds between checks of the closed flag while receiving
RECEIVER_JOIN_TIMEOUT = 2.0  # seconds to wait for the receiver thread on stop

# Wire format
ENCODING = 'utf-8'
DELIMITER = ':'
MAX_FIELDS = 3

# Logging
LOGGER_NAME = 'multicast_chat'

# Message Types
class MessageTypes:
    JOIN = 'JOIN'
    LEAVE = 'LEAVE'
    MESSAGE = 'MESSAGE'
    REQUEST_USER_LIST = 'REQUEST_USER_LIST'
    USER_LIST = 'USER_LIST'
