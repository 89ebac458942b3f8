"""
FastAPI feedback service.

Provides REST API for citizen feedback with:
- POST /projects/{project_id}/feedback - Submit feedback
- GET /projects/{project_id}/feedback - Project feedback, newest first
- GET /feedback - All feedback with project titles
- GET /health - Service health check
"""

from govhub.api.app import create_app

__all__ = ["create_app"]
