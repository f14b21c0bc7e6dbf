"""
UI package for the OD&H player.
"""

from .transport_bar import TransportBar
from .volume_control import VolumeControl
from .playlist_panel import PlaylistPanel
