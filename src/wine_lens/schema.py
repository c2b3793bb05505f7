"""Data models for wine-lens."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

NO_TEXT_EXTRACTED = "No text extracted"

WineSource = Literal["catalog", "derived-from-analysis"]


class AdditionalInfo(BaseModel):
    """Supplementary classification tags read from a label."""

    wine_type: str | None = None
    appellation: str | None = None
    classification: str | None = None


class WineLabelAnalysis(BaseModel):
    """Structured information extracted from a wine label."""

    wine_name: str = ""
    producer: str = ""
    vintage: str = ""
    region: str = ""
    grape_varieties: list[str] = Field(default_factory=list)
    alcohol_content: str | None = None
    extracted_text: str = NO_TEXT_EXTRACTED
    confidence: int = Field(default=30, ge=30, le=95)
    additional_info: AdditionalInfo | None = None

    @property
    def wine_type(self) -> str | None:
        return self.additional_info.wine_type if self.additional_info else None

    @property
    def has_extracted_text(self) -> bool:
        text = self.extracted_text.strip()
        return bool(text) and text != NO_TEXT_EXTRACTED


class TastingNotes(BaseModel):
    """Tasting notes of a catalog wine."""

    model_config = ConfigDict(frozen=True)

    appearance: str = ""
    aroma: str = ""
    taste: str = ""
    finish: str = ""


class Wine(BaseModel):
    """A catalog wine record, or one synthesized from a label analysis."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    producer: str
    vintage: int | None = None
    region: str
    country: str
    grape_varieties: tuple[str, ...] = ()
    rating: int = Field(ge=0, le=100)
    price: float | None = None
    alcohol_content: str | None = None
    description: str = ""
    tasting_notes: TastingNotes = TastingNotes()
    food_pairings: tuple[str, ...] = ()
    serving_temperature: str = ""
    decanting_time: str | None = None
    image_url: str = ""
    source: WineSource = "catalog"


class MatchResult(BaseModel):
    """Final outcome of recognizing one label image."""

    wine: Wine | None = None
    confidence: int = Field(ge=0, le=100)
    extracted_text: str
    analysis: WineLabelAnalysis | None = None
