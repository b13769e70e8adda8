"""Схемы запросов и ответов REST API."""
from pydantic import BaseModel, Field


class CreateGameRequest(BaseModel):
    size: int = Field(gt=0)
    diamonds: int = Field(gt=0)


class CreateGameResponse(BaseModel):
    id: str
    size: int
    diamonds: int


class CoordinateSchema(BaseModel):
    x: int
    y: int


class GameStateResponse(BaseModel):
    gameId: str
    size: int
    diamonds: int
    players: list[str]
    openedDiamonds: list[CoordinateSchema]
    winnerId: str | None = None
    gameOver: bool
    currentPlayerId: str | None = None
