"""Game domain services: board geometry, the game state machine, the
room registry and room eviction.

Socket handlers and HTTP routes import from here; nothing in this package
knows about connections except the seat handles stored on rooms.
"""
