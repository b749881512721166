from typing import List, Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    # Conexão com o banco: DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME.
    # DATABASE_URL, se definido, substitui todas as partes (usado nos testes).
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "controle"
    db_password: str = "controle"
    db_name: str = "sistema_controle"
    db_driver: str = "postgresql+asyncpg"
    database_url: Optional[str] = None
    db_pool_size: int = 10

    port: int = 3000
    environment: str = "production"
    log_level: str = "INFO"

    # CORS: lista separada por vírgula. "*" libera qualquer origem.
    cors_origins: str = "stellar-paprenjak-3b01e7.netlify.app,http://localhost:3000,*"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def sqlalchemy_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()
