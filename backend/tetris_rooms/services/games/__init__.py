"""Game domain services: room registry, piece windows, penalties, reaping.

This package contains the in-memory game mechanics that HTTP routes and
socket handlers call into, keeping transport concerns separated from the
room state and its locking.
"""
