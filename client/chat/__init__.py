"""
Chat module for the multicast presence and messaging protocol.

Handles:
- Joining and leaving the group
- Requesting and answering the user list
- Sending chat messages
- Receiving and dispatching group traffic
"""

from .receiver_loop import PresenceObserver, ReceiverLoop, ReceiverState
from .presence_controller import PresenceController

__all__ = ['PresenceObserver', 'ReceiverLoop', 'ReceiverState', 'PresenceController']
