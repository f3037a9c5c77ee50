from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SentimentClass(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    MIXED = "MIXED"
    NEUTRAL = "NEUTRAL"


class ControversyType(str, Enum):
    POSITIVE_DOMINANT = "POSITIVE_DOMINANT"
    NEGATIVE_DOMINANT = "NEGATIVE_DOMINANT"
    CHAOTIC = "CHAOTIC"


class DayDominance(str, Enum):
    POS_DOMINANT = "POS_DOMINANT"
    NEG_DOMINANT = "NEG_DOMINANT"
    CLOSE_BATTLE = "CLOSE_BATTLE"


class DailySentimentData(BaseModel):
    """One keyword, one day, one dominant-sentiment bucket."""

    model_config = ConfigDict(allow_inf_nan=False)

    keyword: str
    sentiment: SentimentClass
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    avg_pos: Optional[float] = None
    avg_neg: Optional[float] = None
    avg_mix: Optional[float] = None
    avg_neutral: Optional[float] = None
    count: int = Field(default=0, ge=0)


class AggregatedSentimentItem(BaseModel):
    group_key: str
    avg_pos: float
    avg_neg: float
    avg_mix: float
    avg_neutral: float
    pos_count: int
    neg_count: int
    mix_count: int
    neutral_count: int
    count: int
    active_days_of_keyword: int


class SentimentData(BaseModel):
    keyword: str
    avg_pos: float
    avg_neg: float
    avg_mix: float
    avg_neutral: float
    pos_count: int
    neg_count: int
    mix_count: int
    neutral_count: int
    total_count: int


class SentimentListItem(BaseModel):
    keyword: str
    avg_pos: Optional[float] = None
    avg_neg: Optional[float] = None
    avg_mix: Optional[float] = None
    avg_neutral: Optional[float] = None
    pos_count: Optional[int] = None
    neg_count: Optional[int] = None
    mix_count: Optional[int] = None
    neutral_count: Optional[int] = None
    count: int


class ControversyListItem(BaseModel):
    keyword: str
    count: int
    score: float
    type: ControversyType


class TimeSeriesPoint(BaseModel):
    day: str
    avg_pos: Optional[float] = None
    avg_neg: Optional[float] = None
    avg_mix: Optional[float] = None
    avg_neutral: Optional[float] = None
    count: int


class DistributionPoint(BaseModel):
    sentiment: str
    avg_value: float
    count: int


class PeriodAverage(BaseModel):
    keyword: Optional[str] = None
    avg_pos: Optional[float] = None
    avg_neg: Optional[float] = None
    avg_mix: Optional[float] = None
    avg_neutral: Optional[float] = None
    count: int


class SentimentDelta(BaseModel):
    keyword: str
    delta: float
    delta_type: str = Field(pattern="^(POSITIVE|NEGATIVE)$")
