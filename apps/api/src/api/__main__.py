from __future__ import annotations

import uvicorn

from devkit.config import load_settings


def main() -> None:
    settings = load_settings("pharmacy-payments-api")
    uvicorn.run("api.app:app", host=settings.API_HOST, port=settings.API_PORT, reload=False)


if __name__ == "__main__":
    main()
