# healthsrv/routes/health.py
from flask import Blueprint, make_response

bp = Blueprint("health", __name__)

# Served verbatim; jsonify() would reorder and compact the keys.
HEALTH_BODY = '{"status": "healthy", "message": "Server is running"}'

@bp.get("/health")
def health():
    out = make_response(HEALTH_BODY, 200)
    out.headers["Content-Type"] = "application/json"
    return out
