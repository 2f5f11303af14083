"""Canteen FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# PROTEAN_ENV selects the config overlay from domain.toml:
#   - unset        -> in-memory providers and event store
#   - "production" -> sqlite through SQLAlchemy
from canteen.api.app import create_app
from canteen.domain import canteen

canteen.init()

app = create_app()
