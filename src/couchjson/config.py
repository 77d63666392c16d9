import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    url: str = Field(
        default="http://localhost:5984/",
        description="Base URI of the server.",
    )
    user: Optional[str] = Field(default=None, description="Basic-Auth user name.")
    password: Optional[str] = Field(default=None, description="Basic-Auth password.")
    timeout: Optional[float] = Field(
        default=None, gt=0, description="Request timeout in seconds."
    )


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Read COUCHDB_URL, COUCHDB_USER, COUCHDB_PASSWORD and COUCHDB_TIMEOUT.

    A ``.env`` file (or ``env_file``) is loaded first; variables already set
    in the environment win.
    """
    load_dotenv(env_file, override=False)

    values = {
        "url": os.getenv("COUCHDB_URL"),
        "user": os.getenv("COUCHDB_USER"),
        "password": os.getenv("COUCHDB_PASSWORD"),
        "timeout": os.getenv("COUCHDB_TIMEOUT") or None,
    }
    return Settings(**{k: v for k, v in values.items() if v is not None})
