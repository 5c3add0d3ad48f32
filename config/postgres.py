import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class PostgresConfig(BaseModel):
    host: str
    port: int
    dbname: str
    user: str
    password: str
    sslmode: Optional[str] = None

    @classmethod
    def from_env(cls) -> "PostgresConfig":
        return cls(
            host=os.environ["PG_HOST"],
            port=int(os.environ["PG_PORT"]),
            dbname=os.environ["PG_DB"],
            user=os.environ["PG_USER"],
            password=os.environ["PG_PASSWORD"],
            sslmode=os.getenv("PG_SSLMODE") or None,
        )

    def connect_kwargs(self) -> dict:
        kwargs = {
            "host": self.host,
            "port": self.port,
            "dbname": self.dbname,
            "user": self.user,
            "password": self.password,
        }
        if self.sslmode:
            kwargs["sslmode"] = self.sslmode
        return kwargs
