"""Pydantic models describing the Steam Web API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SteamBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def _steam_id_to_int(value: int | str) -> int:
    # 64-bit ids are sent as decimal strings
    return int(value)


class FriendPayload(SteamBaseModel):
    steam_id: int = Field(alias="steamid")
    relationship: str
    friend_since: int

    _normalize_steam_id = field_validator("steam_id", mode="before")(_steam_id_to_int)

    @field_validator("friend_since", mode="before")
    @classmethod
    def _parse_epoch(cls, value: int | str) -> int:
        return int(value)


class FriendsList(SteamBaseModel):
    friends: list[FriendPayload] = Field(default_factory=list["FriendPayload"])


class FriendListResponse(SteamBaseModel):
    friends_list: FriendsList = Field(alias="friendslist")


class PlayerPayload(SteamBaseModel):
    steam_id: int = Field(alias="steamid")
    persona_name: str = Field(alias="personaname")
    profile_url: str = Field(alias="profileurl")

    _normalize_steam_id = field_validator("steam_id", mode="before")(_steam_id_to_int)


class Players(SteamBaseModel):
    players: list[PlayerPayload] = Field(default_factory=list["PlayerPayload"])


class PlayerSummariesResponse(SteamBaseModel):
    response: Players
