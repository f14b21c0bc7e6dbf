"""
OD&H Player - a single-track audio player.
"""
