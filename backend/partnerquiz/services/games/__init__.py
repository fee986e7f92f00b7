"""Game domain services: admission, round coordination, scoring, presence
and stale room reclamation.

This package contains the pure game engine that the Socket.IO handlers call,
keeping transport concerns separated from core game mechanics. Every action
takes the RoomStore and a ``broadcast(event, payload, room_code)`` callable.
"""
