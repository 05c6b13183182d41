"""
Presence module for peer directory state.

Handles:
- Tracking which peers are believed present
- Snapshots for observers
"""

from .directory import Directory

__all__ = ['Directory']
