#!/usr/bin/env python3
"""Run the RF Link Budget application"""
import uvicorn

from linkbudget.core.config import settings


def main() -> None:
    uvicorn.run(
        "linkbudget.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
