"""
realworld_api.api

API package.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, wire schemas and error mapping.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + auth + delegation to services.
