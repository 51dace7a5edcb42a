from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices, model_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Transactions API"
    ENV: str = Field(default="lab", validation_alias=AliasChoices("TRANSACTIONS_ENV","ENV"))  # lab|prod
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("TRANSACTIONS_LOG_LEVEL","LOG_LEVEL"))

    # Servidor (python -m app)
    HOST: str = Field(default="0.0.0.0", validation_alias=AliasChoices("TRANSACTIONS_HOST","HOST"))
    PORT: int = Field(default=3333, validation_alias=AliasChoices("TRANSACTIONS_PORT","PORT"))

    # Store: "sql" (SQLAlchemy) ou "memory" (lista em memória, some no restart)
    STORE_BACKEND: str = Field(default="sql", validation_alias=AliasChoices("TRANSACTIONS_STORE_BACKEND","STORE_BACKEND"))
    DATABASE_URL: str = Field(default="sqlite:///./lab.db", validation_alias=AliasChoices("TRANSACTIONS_DATABASE_URL","DATABASE_URL"))
    # cria as tabelas no startup (lab); em prod use alembic upgrade head
    DB_CREATE_ALL: bool = Field(default=True, validation_alias=AliasChoices("TRANSACTIONS_DB_CREATE_ALL","DB_CREATE_ALL"))

    @model_validator(mode="after")
    def _invariants(self):
        backend = (self.STORE_BACKEND or "").strip().lower()
        if backend not in ("sql", "memory"):
            raise ValueError("STORE_BACKEND inválido (use: sql | memory)")
        self.STORE_BACKEND = backend
        return self

settings = Settings()
