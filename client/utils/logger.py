"""
Client logging module.

This module handles client-side logging functionality.
"""

import logging
import sys

from common.constants import LOGGER_NAME


class ClientLogger:
    """Client logging class."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

    def set_level(self, log_level: int):
        """Change the level of the logger and its handlers."""
        self.logger.setLevel(log_level)
        for handler in self.logger.handlers:
            handler.setLevel(log_level)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_group_joined(self, host: str, port: int, interface: str):
        """Log multicast group membership."""
        self.info(f"Joined multicast group {host}:{port} on interface {interface}")

    def log_group_left(self, host: str, port: int):
        """Log leaving the multicast group."""
        self.info(f"Left multicast group {host}:{port}")

    def log_packet_sent(self, payload: str):
        """Log an outgoing datagram."""
        self.info(f"Sent packet: {payload}")

    def log_packet_received(self, payload: str):
        """Log an incoming datagram."""
        self.info(f"Received packet: {payload}")

    def log_malformed(self, payload: str, reason: str):
        """Log a datagram that could not be decoded."""
        self.warning(f"Received malformed message ({reason}): {payload}")

    def log_session(self, peer_id: str, action: str):
        """Log session start/stop."""
        self.info(f"[SESSION] {action} as '{peer_id}'")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ClientLogger()
