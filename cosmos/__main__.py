"""
Run the site with uvicorn on APP_PORT:

  python -m cosmos
"""

import uvicorn
from dotenv import load_dotenv

from cosmos.core.config import get_settings


def main() -> None:
    load_dotenv()
    settings = get_settings()
    uvicorn.run(
        "cosmos.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=not settings.is_production and settings.DEBUG,
    )


if __name__ == "__main__":
    main()
