from marketplace.shared.config.settings import Settings


def test_explicit_database_url_wins():
    settings = Settings(DATABASE_URL="sqlite+aiosqlite:///./local.db", DB_HOST="db.internal")

    assert settings.database_url == "sqlite+aiosqlite:///./local.db"


def test_database_url_assembled_from_db_parts():
    settings = Settings(
        DATABASE_URL=None,
        DB_HOST="db.internal",
        DB_PORT=6543,
        DB_NAME="directory",
        DB_USER="svc",
        DB_PASSWORD="pw",
    )

    assert settings.database_url == "postgresql+asyncpg://svc:pw@db.internal:6543/directory"


def test_pool_defaults():
    settings = Settings()

    assert (settings.DB_POOL_SIZE, settings.DB_MAX_OVERFLOW, settings.DB_POOL_TIMEOUT) == (10, 20, 30)
    assert settings.DB_ECHO is False
