"""
FacePass backend: root package.

This package contains the FastAPI app entry point (main.py), API routes,
domain logic (tickets, events, biometric comparison), infrastructure
(MongoDB, face verification backends, snapshot feed) and the DI container.
"""
