"""
Pydantic-модели JSON-ответов CLI (generate --json, inspect).

Имена полей: camelCase, как они уходят в JSON.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid")


class GenerateResult(_Model):
    protocol: int
    toolVersion: str
    policy: str
    count: int = Field(ge=0)
    seed: Optional[int] = None
    outPath: Optional[str] = None  # None при --dry-run
    prompts: List[str] = Field(default_factory=list)


class Stats(_Model):
    choices: int
    maxDepth: int
    variants: int
    minLength: int
    maxLength: int


class AlternativeRow(_Model):
    path: str
    text: str
    weight: float = Field(gt=0)
    probability: float = Field(gt=0, le=1)


class InspectReport(_Model):
    protocol: int
    toolVersion: str
    source: str
    stats: Stats
    alternatives: List[AlternativeRow] = Field(default_factory=list)


__all__ = ["GenerateResult", "Stats", "AlternativeRow", "InspectReport"]
