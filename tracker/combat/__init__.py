"""
Combat module for the tracker.

This module handles the combat state engine: identity keys, hit point
arithmetic, death saves, turn order, consumable resets, the initiative
reducers and the encounter context that binds them to a roster.
"""
