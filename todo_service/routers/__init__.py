"""
routers/ — FastAPI route modules.

Each file contains a thin APIRouter. All business logic
lives in services/. Routers parse input, call services,
and map service errors to responses.
"""
