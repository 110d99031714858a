"""
Run the API server:
  python -m catalog
Listens on HOST:PORT from the environment (default 0.0.0.0:5000).
"""

import uvicorn

from catalog.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("catalog.main:app", host=settings.HOST, port=settings.PORT, reload=False)


if __name__ == "__main__":
    main()
