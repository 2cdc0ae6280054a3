"""Application settings and configuration.

Settings are loaded from environment variables (or an ``.env`` file) with
defaults suitable for local development against SQLite.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Database configuration
    database_url: str = Field(default="sqlite:///./realworld.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Argon2id parameters; the library defaults follow RFC 9106's second recommendation.
    argon2_time_cost: int = Field(default=3, ge=1, alias="ARGON2_TIME_COST")
    argon2_memory_cost: int = Field(default=65536, ge=8, alias="ARGON2_MEMORY_COST")
    argon2_parallelism: int = Field(default=4, ge=1, alias="ARGON2_PARALLELISM")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def sqlalchemy_url(self) -> str:
        """Return the effective URL with the psycopg (v3) driver made explicit.

        SQLAlchemy maps bare ``postgresql://`` URLs to psycopg2, which is not
        installed; ``postgres://`` (as issued by most hosting providers) is not
        recognised at all.
        """
        url = self.effective_database_url
        for scheme in ("postgresql://", "postgres://"):
            if url.startswith(scheme):
                return "postgresql+psycopg://" + url[len(scheme):]
        return url


settings = Settings()
