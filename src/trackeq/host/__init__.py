"""Host player integration: protocols, log forwarding and profile selector."""

from trackeq.host.log_handler import HostLogHandler
from trackeq.host.profile_selector import ProfileSelector
from trackeq.host.protocols import EventSink, HostPlayer, MockHost

__all__ = ["EventSink", "HostLogHandler", "HostPlayer", "MockHost", "ProfileSelector"]
