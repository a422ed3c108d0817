from fastapi import APIRouter, Depends
from skillhub.routers import analytics, auth, departments, employees, evaluations, skills
from skillhub.routers.auth_deps import get_current_user

# Centralized API router hub: routers are aggregated here,
# and main.py only imports this single hub.
api_router = APIRouter()

protected = [Depends(get_current_user)]

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(employees.router, tags=["Employees"], dependencies=protected)
api_router.include_router(departments.router, tags=["Departments"], dependencies=protected)
api_router.include_router(skills.router, tags=["Skills"], dependencies=protected)
api_router.include_router(evaluations.router, tags=["Evaluations"], dependencies=protected)
api_router.include_router(analytics.router, tags=["Analytics"], dependencies=protected)
