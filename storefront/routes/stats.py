# storefront/routes/stats.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.users import User
from storefront.schemas.stats import DashboardMetrics
from storefront.services.dashboard import get_dashboard_metrics
from storefront.utils.tokenJWT import role_required

router = APIRouter(
    prefix="/stats",
    tags=["Stats"]
)


# === Admin dashboard summary (getDashboardMetrics) ===

@router.get("/dashboard", response_model=DashboardMetrics)
def dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return get_dashboard_metrics(db)
