"""
Storefront service for the classifieds marketplace.

This package provides a FastAPI application over the managed Postgres
catalog and auth provider, plus per-browser cart and watchlist persistence
backed by Redis.
"""
