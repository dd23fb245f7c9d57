from pathlib import Path

import psycopg

from movies_api.core.config import settings

SCHEMA_SQL = Path(__file__).parent / "sql" / "user_reviews.sql"


def main():
    if not settings.postgres_dsn:
        raise SystemExit("POSTGRES_DSN is not set")

    print("Using DSN host:", settings.postgres_dsn.rsplit("@", 1)[-1])
    # таблица user_reviews, уникальность (user_id, movie_id) и процедуры
    with psycopg.connect(settings.postgres_dsn, autocommit=True) as conn:
        conn.execute(SCHEMA_SQL.read_text(encoding="utf-8"))

    print("Schema ensured.")


if __name__ == "__main__":
    main()
