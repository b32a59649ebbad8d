"""
guestagent — guest-side control surface for a host management agent.

Lets a host controller realign a corrupted command channel, discover
which commands this agent exposes, and scrub host-identifying state
from a cloned guest.
"""

import os

__version__ = "0.1.0"

CONFIG_PATH = os.environ.get("GUESTAGENT_CONFIG", "/etc/guestagent/config.yaml")
