"""Run the interview coach with uvicorn: ``python -m services.interview_coach.app``."""

from __future__ import annotations

import uvicorn

from shared.settings import Settings


def main() -> None:
    s = Settings()
    uvicorn.run(
        "services.interview_coach.app.main:app",
        host=s.host,
        port=s.port,
        log_level=s.log_level.lower(),
    )


if __name__ == "__main__":
    main()
