# backend/main.py
# Entry point: `python -m backend.main` or `uvicorn backend.main:app`
import uvicorn

from backend.app.core.config import settings
from backend.app.main import app  # noqa: F401

if __name__ == "__main__":
    uvicorn.run(
        "backend.app.main:app",
        host="0.0.0.0",
        port=8000,
        proxy_headers=True,
        forwarded_allow_ips=settings.FORWARDED_ALLOW_IPS,
    )
