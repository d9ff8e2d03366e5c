"""
Trend analysis pipeline: articles -> full text -> classification -> saturation scores.
"""
from __future__ import annotations

import asyncio
import itertools
import logging
from typing import List, Optional, Tuple

from web3trends.config import Settings
from web3trends.core.saturation import score_saturation
from web3trends.models import AnalysisBatch, Article, ClassificationResult, PricePoint
from web3trends.services.classifier import GeminiClassifier
from web3trends.sources.gnews import GNewsFetcher
from web3trends.sources.reader import ReaderProxyFetcher
from web3trends.sources.twelvedata import TwelveDataFetcher
from web3trends.utils import now_utc, resolve_topic

logger = logging.getLogger(__name__)

# Shown when the market data provider is unavailable.
FALLBACK_PRICE_SERIES: Tuple[PricePoint, ...] = (
    PricePoint(date="2025-09-06", close="7.50"),
    PricePoint(date="2025-09-07", close="7.65"),
    PricePoint(date="2025-09-08", close="7.45"),
    PricePoint(date="2025-09-09", close="7.80"),
    PricePoint(date="2025-09-10", close="7.75"),
)

FALLBACK_PRICE_NOTICE = "Using fallback market data due to API limitations."
NO_ARTICLES_NOTICE = "Failed to fetch and analyze news: No articles found for this topic."


class BatchPublisher:
    """Holds the latest published batch and rejects stale runs.

    Runs are numbered in start order. Once a newer run has cleared the
    snapshot or published, an older run may no longer publish, so a slow run
    for an old topic never shows up under a newer selection.
    """

    def __init__(self):
        self._run_ids = itertools.count(1)
        self._latest_started = 0
        self._latest_reset = 0
        self._latest_published = 0
        self.snapshot: Optional[AnalysisBatch] = None
        self.loading = False

    def next_run_id(self) -> int:
        run_id = next(self._run_ids)
        self._latest_started = run_id
        return run_id

    def reset(self, run_id: int, topic: str) -> None:
        """Clear the visible snapshot at the start of the newest run."""
        if run_id != self._latest_started:
            return
        self._latest_reset = run_id
        self.snapshot = AnalysisBatch(run_id=run_id, topic=topic, as_of=now_utc())
        self.loading = True

    def publish(self, run_id: int, batch: AnalysisBatch) -> bool:
        """
        Replace the snapshot with ``batch`` unless a newer run has reset or published.

        Returns:
            True if the batch became the snapshot
        """
        newest_visible = max(self._latest_reset, self._latest_published)
        if run_id < newest_visible:
            logger.info("Dropping stale run %d (run %d owns the snapshot)", run_id, newest_visible)
            return False

        self._latest_published = run_id
        self.snapshot = batch
        if run_id == self._latest_started:
            self.loading = False
        return True


class TrendPipeline:
    """Runs one analysis per topic selection and publishes the result."""

    def __init__(
        self,
        settings: Settings,
        article_source: Optional[GNewsFetcher] = None,
        content_fetcher: Optional[ReaderProxyFetcher] = None,
        classifier: Optional[GeminiClassifier] = None,
        price_source: Optional[TwelveDataFetcher] = None,
        publisher: Optional[BatchPublisher] = None,
    ):
        self.article_limit = settings.ARTICLE_LIMIT
        self.article_source = article_source or GNewsFetcher(settings)
        self.content_fetcher = content_fetcher or ReaderProxyFetcher(settings)
        self.classifier = classifier or GeminiClassifier(settings)
        self.price_source = price_source or TwelveDataFetcher(settings)
        self.publisher = publisher or BatchPublisher()

    async def _analyze_article(self, article: Article) -> ClassificationResult:
        """Fetch the article's full text and classify it, falling back to the description."""
        try:
            full_content = await self.content_fetcher.fetch_full_content(article.url)
            return await self.classifier.classify(full_content or article.description, article.title)
        except Exception as e:
            logger.error("Unexpected error analyzing %s: %s", article.url, e)
            return ClassificationResult.fallback(f"unexpected error: {type(e).__name__}")

    async def _fetch_prices(self) -> Tuple[List[PricePoint], Optional[str]]:
        try:
            return await self.price_source.fetch_price_series(), None
        except Exception as e:
            logger.warning("Market data unavailable, using fallback series: %s", e)
            return list(FALLBACK_PRICE_SERIES), FALLBACK_PRICE_NOTICE

    async def run_analysis(self, topic: str) -> AnalysisBatch:
        """
        Analyze recent news for a topic.

        Args:
            topic: Preset label or raw search query

        Returns:
            The assembled AnalysisBatch (also published unless a newer run won)

        Raises:
            ValueError: if the topic is empty
        """
        query = resolve_topic(topic)
        run_id = self.publisher.next_run_id()
        self.publisher.reset(run_id, topic)

        price_task = asyncio.create_task(self._fetch_prices())

        results: List[ClassificationResult] = []
        errors: List[str] = []

        logger.info("Run %d: fetching news for %r", run_id, query)
        try:
            articles = (await self.article_source.fetch(query))[: self.article_limit]
        except Exception as e:
            logger.error("Run %d: error in news processing pipeline: %s", run_id, e)
            articles = []
            errors.append(f"Failed to fetch and analyze news: {e}")
        else:
            if not articles:
                errors.append(NO_ARTICLES_NOTICE)

        if articles:
            logger.info("Run %d: analyzing %d articles", run_id, len(articles))
            results = list(await asyncio.gather(*(self._analyze_article(a) for a in articles)))

        price_series, price_notice = await price_task
        if price_notice:
            errors.insert(0, price_notice)

        batch = AnalysisBatch(
            run_id=run_id,
            topic=topic,
            as_of=now_utc(),
            articles=articles,
            results=results,
            display_titles=[article.title for article in articles],
            sector_scores=score_saturation(result.classification for result in results),
            price_series=price_series,
            errors=errors,
        )

        defaulted = sum(1 for result in results if result.defaulted)
        logger.info(
            "Run %d: %d articles, %d defaulted classifications", run_id, len(articles), defaulted
        )

        self.publisher.publish(run_id, batch)
        return batch
