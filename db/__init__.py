"""
db/ - Database Layer
====================
Handles the PostgreSQL connection, schema initialization, and the
translation of driver errors into the store's own exceptions.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
