from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class CaptainEntry(BaseModel):
    """One guard/captain supporter. Only the username is used."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    username: StrictStr


# -------------------------
# Upstream wire schema
# -------------------------
# Field types are strict: "page": "1" is a schema mismatch, not a page number.


class CaptainEnvelope(BaseModel):
    """
    Outer `code`/`message` wrapper, checked before `data` is looked at.

    Rejections come back as HTTP 200 with a non-zero code and `data` null or {}.
    """

    model_config = ConfigDict(extra="ignore")

    code: StrictInt = 0
    message: StrictStr = ""
    data: Any = None


class CaptainInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Highest page number that currently has data.
    page: StrictInt


class CaptainData(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    info: CaptainInfo
    entries: List[CaptainEntry] = Field(alias="list")
    top3: Optional[List[CaptainEntry]] = None


class CaptainResponse(BaseModel):
    """
    Envelope returned by the guardTab topList endpoint.

    `code` is 0 on success. Older payloads without it are treated as success.
    """

    model_config = ConfigDict(extra="ignore")

    code: StrictInt = 0
    message: StrictStr = ""
    data: CaptainData


# -------------------------
# Decoded page
# -------------------------


class CaptainPage(BaseModel):
    """A single decoded page of the roster."""

    model_config = ConfigDict(frozen=True)

    current_page: int
    entries: List[CaptainEntry] = Field(default_factory=list)
    top3: Optional[List[CaptainEntry]] = None

    @classmethod
    def from_response(cls, resp: CaptainResponse) -> "CaptainPage":
        return cls(
            current_page=resp.data.info.page,
            entries=list(resp.data.entries),
            top3=list(resp.data.top3) if resp.data.top3 is not None else None,
        )
