"""Deterministic development provider returning exemplar analyses."""

import logging
import random

from wine_lens.image import LabelImage
from wine_lens.providers.base import BaseProvider
from wine_lens.schema import AdditionalInfo, WineLabelAnalysis
from wine_lens.scoring import score_analysis

logger = logging.getLogger(__name__)

EXEMPLARS = (
    {
        "wine_name": "Château Margaux",
        "producer": "Château Margaux",
        "vintage": "2018",
        "region": "Margaux, Bordeaux",
        "grape_varieties": ["Cabernet Sauvignon", "Merlot", "Petit Verdot"],
        "alcohol_content": "13.5%",
        "wine_type": "red",
        "appellation": "Margaux AOC",
        "classification": "Premier Grand Cru Classé",
    },
    {
        "wine_name": "Opus One",
        "producer": "Opus One Winery",
        "vintage": "2019",
        "region": "Napa Valley",
        "grape_varieties": ["Cabernet Sauvignon", "Merlot", "Cabernet Franc"],
        "alcohol_content": "14.5%",
        "wine_type": "red",
        "appellation": "Napa Valley AVA",
        "classification": "Premium",
    },
    {
        "wine_name": "Dom Pérignon",
        "producer": "Moët & Chandon",
        "vintage": "2012",
        "region": "Champagne",
        "grape_varieties": ["Chardonnay", "Pinot Noir"],
        "alcohol_content": "12.5%",
        "wine_type": "sparkling",
        "appellation": "Champagne AOC",
        "classification": "Prestige Cuvée",
    },
)


class DevelopmentProvider(BaseProvider):
    """Stub provider for development and fallback; never touches the network."""

    name = "development"

    def __init__(self, rng: random.Random | None = None):
        super().__init__()
        self.rng = rng or random.Random()

    def analyze(self, image: LabelImage) -> WineLabelAnalysis:
        exemplar = self.rng.choice(EXEMPLARS)
        self._last_parser = "exemplar"
        logger.debug("development analysis for %s: %s", image.filename or "upload", exemplar["wine_name"])
        analysis = WineLabelAnalysis(
            wine_name=exemplar["wine_name"],
            producer=exemplar["producer"],
            vintage=exemplar["vintage"],
            region=exemplar["region"],
            grape_varieties=list(exemplar["grape_varieties"]),
            alcohol_content=exemplar["alcohol_content"],
            extracted_text=f"Mock extracted text for {exemplar['wine_name']} from {exemplar['producer']}",
            additional_info=AdditionalInfo(
                wine_type=exemplar["wine_type"],
                appellation=exemplar["appellation"],
                classification=exemplar["classification"],
            ),
        )
        return score_analysis(analysis)
