"""
API layer for the FacePass backend.

Exposes HTTP and WebSocket endpoints under /api/v1 (auth, events, tickets,
gate verification and live event snapshots).
"""
