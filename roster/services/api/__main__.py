# roster/services/api/__main__.py
from __future__ import annotations

import uvicorn

from roster.common.settings import get_settings


def main() -> None:
    """Serve the API: `python -m roster.services.api` or the `roster-api` script."""
    cfg = get_settings()
    uvicorn.run(
        "roster.services.api.app:app",
        host=cfg.api.host,
        port=cfg.api.port,
        log_level=cfg.log_level.lower(),
        reload=cfg.app_env.lower() == "development",
    )


if __name__ == "__main__":
    main()
