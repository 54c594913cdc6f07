"""
Tracker package for tabletop combat encounters.

This package contains the combat state engine: turn order, hit point
arithmetic, hit dice and death save tracking, and round based consumable
resets, together with the static roster models they operate on.
"""
