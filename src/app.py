"""Cartline FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from ordering.domain import ordering

# PROTEAN_ENV selects the domain config overlay
ordering.init()

from ordering.api import create_app  # noqa: E402

app = create_app(ordering)
