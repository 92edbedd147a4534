from fastapi import APIRouter, Request

from decoder_backend import metrics

router = APIRouter(prefix="/api", tags=["metrics"])


@router.get("/metrics")
def get_metrics(request: Request):
    """Return decode/DBC counters plus the number of DBCs currently held in memory."""
    counters = metrics.get_all()
    counters["dbcs_in_memory"] = len(getattr(request.app.state, "dbcs", {}) or {})
    return counters
