"""
Catalog source for the OD&H player.
"""
