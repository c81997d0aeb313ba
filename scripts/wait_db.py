import json
import os
import time

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

TIMEOUT = int(os.getenv("TIMEOUT_S", "120"))
DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg://helpcenter:helpcenter@db:5432/helpcenter")


def db_ok(url: str) -> bool:
    engine = create_engine(url, pool_pre_ping=True, connect_args=_connect_args(url))
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
    finally:
        engine.dispose()


def _connect_args(url: str) -> dict:
    if url.startswith("postgresql"):
        return {"connect_timeout": 2}
    return {}


def main() -> int:
    deadline = time.time() + TIMEOUT
    ok_db = False
    while time.time() < deadline:
        ok_db = db_ok(DATABASE_URL)
        if ok_db:
            print(json.dumps({"ready": True, "database": ok_db}))
            return 0
        time.sleep(2)
    print(json.dumps({"ready": False, "database": ok_db}))
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
