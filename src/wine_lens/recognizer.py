"""Single entry point from label image to matched or synthesized wine."""

from __future__ import annotations

import logging
import random

from wine_lens.catalog import CatalogMatcher
from wine_lens.exceptions import NoStructuredPayloadFound
from wine_lens.fallback import FallbackController
from wine_lens.image import LabelImage, validate_label_image
from wine_lens.schema import NO_TEXT_EXTRACTED, MatchResult, WineLabelAnalysis
from wine_lens.scoring import blended_score, completeness_score, score_analysis
from wine_lens.synthesis import synthesize_wine

logger = logging.getLogger(__name__)


def catalog_query(analysis: WineLabelAnalysis) -> str:
    """Build the free-text catalog query for an analysis.

    Name and producer-bearing analyses search on the wine name plus the raw
    label text; otherwise only the label text is used. The placeholder for
    missing text never reaches the catalog.
    """
    text = analysis.extracted_text if analysis.has_extracted_text else ""
    if analysis.wine_name.strip() or analysis.producer.strip():
        return f"{analysis.wine_name} {text}".strip()
    return text.strip()


class WineRecognizer:
    """Validates, analyzes, matches and scores one label per call."""

    def __init__(
        self,
        controller: FallbackController,
        matcher: CatalogMatcher,
        *,
        rating_rng: random.Random | None = None,
    ):
        self.controller = controller
        self.matcher = matcher
        self.rating_rng = rating_rng

    async def analyze_label(self, image: LabelImage) -> MatchResult:
        """Recognize a wine label.

        Raises:
            InvalidImage: Before any provider call, for a bad type or size.
            ProviderError: Only when the provider fails with fallback disabled.
        """
        validate_label_image(image)

        try:
            analysis = await self.controller.analyze(image)
        except NoStructuredPayloadFound as exc:
            logger.info("no structured payload in provider reply; continuing with raw text")
            analysis = score_analysis(
                WineLabelAnalysis(extracted_text=exc.raw_text.strip() or NO_TEXT_EXTRACTED)
            )

        query = catalog_query(analysis)
        match = self.matcher.best_match(query)
        if match is not None:
            logger.info("catalog match %s for query %r", match.id, query[:80])
            return MatchResult(
                wine=match,
                confidence=blended_score(analysis, from_catalog=True),
                extracted_text=analysis.extracted_text,
                analysis=analysis,
            )

        wine = synthesize_wine(analysis, rng=self.rating_rng)
        logger.info("no catalog match; synthesized=%s", wine is not None)
        return MatchResult(
            wine=wine,
            confidence=completeness_score(analysis),
            extracted_text=analysis.extracted_text,
            analysis=analysis,
        )
