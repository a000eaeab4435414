"""
realworld_api.services

Service-layer package.

Responsibilities:
- Own transaction boundaries (services commit, repositories only flush).
- Compose repository calls and `Auth` into the user/profile/article use cases.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services raise `services.errors.DomainError` subclasses; `api.app` maps them to HTTP.
