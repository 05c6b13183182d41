"""
Client package for LAN Multicast Chat.

This package contains all peer-side functionality including:
- Multicast group transport
- Member directory
- Chat receiver and session lifecycle
- User interface
- Configuration and utilities
"""
