from fastapi import APIRouter

from app.auth.router import SessionDep
from app.deps import AdminServiceDep

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/list")
def list_admins(session: SessionDep, admins: AdminServiceDep):
    return admins.list_admins()


@router.get("/stats")
def dashboard_stats(session: SessionDep, admins: AdminServiceDep):
    """Aggregate counts and the most recent questions for the dashboard."""
    return admins.get_dashboard_stats()
