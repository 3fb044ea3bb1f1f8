"""
Module 06 - Minimal API (FastAPI)

HTTP API for CivisGrid:
- POST /tree - Build a tree, return its root label
- POST /proof - Build a tree, return the proof of one item
- POST /verify - Verify a proof against a trusted root
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
