"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter included by the application factory; shared
services are read from `request.app.state` rather than imported as globals.
"""
