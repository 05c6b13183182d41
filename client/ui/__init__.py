"""
PyQt6 user interface for the multicast chat.
"""
