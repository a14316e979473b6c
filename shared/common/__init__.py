# Shared infrastructure for the Room Reservation Service:
# error envelope, JWT principal, permissions, middleware and HTTP clients.

__version__ = "1.0.0"
