"""
Version 1 of the Forge HTTP API.

Each endpoint module exposes a ``router``; they are mounted here under
their resource prefix.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import adaptation, auth, plans, readiness, recommendations, training_load

_ROUTES = (
    (auth.router, "/auth", "Authentication"),
    (training_load.router, "/training-load", "Training load"),
    (readiness.router, "/readiness", "Readiness"),
    (adaptation.router, "/adaptation", "Adaptation"),
    (plans.router, "/plans", "Training plans"),
    (recommendations.router, "/recommendations", "Recommendations"),
)

api_router = APIRouter()

for router, prefix, tag in _ROUTES:
    api_router.include_router(router, prefix=prefix, tags=[tag])
