"""
realworld_api.api.routers

HTTP routers: health, users, profiles, articles, tags.
"""

# Package marker; routers are imported directly from submodules.
