"""
Shared wire constants and protocol definitions for LAN Multicast Chat.
"""
