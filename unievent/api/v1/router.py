# unievent/api/v1/router.py
from fastapi import APIRouter
from unievent.api.v1 import (
    admin,
    attendance,
    auth,
    colleges,
    events,
    feedback,
    notes,
    registrations,
    reports,
)

api_router = APIRouter()

# -------- rotas públicas --------
api_router.include_router(colleges.router,      prefix="/colleges",      tags=["colleges"])
api_router.include_router(auth.router,          prefix="/auth",          tags=["auth"])

# -------- rotas autenticadas (college vem do principal) --------
api_router.include_router(events.router,        prefix="/events",        tags=["events"])
api_router.include_router(registrations.router, prefix="/registrations", tags=["registrations"])
api_router.include_router(attendance.router,    prefix="/attendance",    tags=["attendance"])
api_router.include_router(feedback.router,      prefix="/feedback",      tags=["feedback"])
api_router.include_router(notes.router,         prefix="/notes",         tags=["notes"])
api_router.include_router(reports.router,       prefix="/reports",       tags=["reports"])
api_router.include_router(admin.router,         prefix="/admin",         tags=["admin"])
