from __future__ import annotations

from functools import lru_cache
from typing import Any, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

UINT32_MAX = 2**32 - 1

CAPTAIN_API_URL = "https://api.live.bilibili.com/xlive/app-room/v2/guardTab/topList"

# The upstream answers inconsistently for clients without a browser signature.
DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:140.0) Gecko/20100101 Firefox/140.0"


def _split_local_url(raw: str) -> Tuple[str, int]:
    """
    Split a listen address of the form "host:port".

    Accepts:
      - "127.0.0.1:3000"
      - "0.0.0.0:8080"
      - "[::1]:3000" (IPv6, brackets stripped)
    """
    s = (raw or "").strip()
    host, sep, port = s.rpartition(":")
    if not sep or not host or not port:
        raise ValueError(f"LOCAL_URL must look like host:port, got {raw!r}")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    try:
        port_num = int(port)
    except ValueError:
        raise ValueError(f"LOCAL_URL port is not a number: {port!r}") from None
    if not 0 < port_num < 65536:
        raise ValueError(f"LOCAL_URL port out of range: {port_num}")

    return host, port_num


class Settings(BaseSettings):
    """
    Process-wide settings, loaded once at startup.

    One server instance serves the roster of exactly one room.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Server runtime (uvicorn)
    local_url: str = Field(default="127.0.0.1:3000", alias="LOCAL_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Target roster
    room_id: int = Field(alias="ROOMID")
    owner_id: int = Field(alias="RUID")

    # Upstream
    captain_api_url: str = Field(default=CAPTAIN_API_URL, alias="CAPTAIN_API_URL")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="USER_AGENT")
    upstream_timeout: float = Field(default=10.0, alias="UPSTREAM_TIMEOUT")

    # -------------------------
    # Validators / normalizers
    # -------------------------

    @field_validator("log_level", mode="before")
    @classmethod
    def _norm_log_level(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip().upper()
        return s or "INFO"

    @field_validator("local_url", mode="before")
    @classmethod
    def _norm_local_url(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip()
        _split_local_url(s)
        return s

    @field_validator("room_id", "owner_id")
    @classmethod
    def _check_uint32(cls, v: int) -> int:
        if not 0 <= v <= UINT32_MAX:
            raise ValueError(f"must fit in an unsigned 32-bit integer, got {v}")
        return v

    @field_validator("user_agent", mode="before")
    @classmethod
    def _norm_user_agent(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip()
        return s or DEFAULT_USER_AGENT

    @field_validator("upstream_timeout")
    @classmethod
    def _check_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be positive")
        return v

    # -------------------------
    # Derived helpers
    # -------------------------

    @property
    def host(self) -> str:
        return _split_local_url(self.local_url)[0]

    @property
    def port(self) -> int:
        return _split_local_url(self.local_url)[1]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # ROOMID and RUID have no defaults, so this raises a ValidationError
    # when the environment does not provide them.
    return Settings()
