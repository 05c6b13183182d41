"""
Network module for the multicast group transport.

Handles:
- Binding and joining the multicast group
- Sending datagrams to the group
- Blocking receive with close-aware cancellation
- Leaving the group
"""

from .group_transport import GroupTransport, FatalSetupError, TransportClosedError

__all__ = ['GroupTransport', 'FatalSetupError', 'TransportClosedError']
