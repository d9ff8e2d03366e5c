"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from web3trends.config import TOPIC_PRESETS, get_settings
from web3trends.core.charts import saturation_color, sentiment_distribution
from web3trends.models import AnalysisBatch
from web3trends.pipeline import TrendPipeline
from web3trends.schemas import (
    AnalysisResponse,
    ArticleOut,
    ClassificationOut,
    PricePointOut,
    SectorScoreOut,
    TopicPreset,
)
from web3trends.utils import now_utc

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_pipeline() -> TrendPipeline:
    """Process-wide pipeline; its publisher holds the latest snapshot."""
    return TrendPipeline(get_settings())


def build_analysis_response(batch: AnalysisBatch, loading: bool = False) -> AnalysisResponse:
    """
    Build the API response for an analysis batch.

    Args:
        batch: Published or freshly computed batch
        loading: Whether a newer run is still in progress

    Returns:
        AnalysisResponse object
    """
    articles = [
        ArticleOut(
            title=article.title,
            display_title=display_title,
            description=article.description,
            url=article.url,
            published_at=article.published_at,
            source_name=article.source_name,
            source_domain=article.source_domain,
            classification=ClassificationOut(**result.classification.to_payload()),
            defaulted=result.defaulted,
            default_reason=result.reason,
        )
        for article, result, display_title in zip(batch.articles, batch.results, batch.display_titles)
    ]

    return AnalysisResponse(
        run_id=batch.run_id,
        topic=batch.topic,
        as_of=batch.as_of.isoformat(),
        loading=loading,
        n_articles=len(articles),
        articles=articles,
        sector_scores=[
            SectorScoreOut(sector=s.sector, score=s.score, level=s.level, color=saturation_color(s.score))
            for s in batch.sector_scores
        ],
        sentiment_distribution=sentiment_distribution(batch.classifications),
        price_series=[PricePointOut(date=p.date, close=p.close) for p in batch.price_series],
        errors=list(batch.errors),
    )


# Initialize FastAPI app
app = FastAPI(
    title="Web3 Trends API",
    version="0.1.0",
    description="News-driven sentiment and job saturation analysis for Web3 sectors",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": "web3-trends-api",
    }


@app.get("/topics", response_model=List[TopicPreset])
async def list_topics():
    """Preset topics offered by the dashboard."""
    return [TopicPreset(label=label, query=query) for label, query in TOPIC_PRESETS.items()]


@app.get("/trends", response_model=AnalysisResponse)
async def analyze_topic(
    topic: str = Query(..., min_length=1, max_length=200, description="Preset label or search query"),
    pipeline: TrendPipeline = Depends(get_pipeline),
):
    """
    Run the full analysis for a topic and return the result.

    Args:
        topic: Preset label (e.g. "DeFi Trends") or raw search query

    Returns:
        AnalysisResponse with articles, classifications, scores and prices
    """
    if not topic.strip():
        raise HTTPException(status_code=422, detail="topic must not be blank")

    try:
        batch = await pipeline.run_analysis(topic)
        return build_analysis_response(batch)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error analyzing topic {topic!r}: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.get("/trends/latest", response_model=AnalysisResponse)
async def latest_analysis(pipeline: TrendPipeline = Depends(get_pipeline)):
    """Most recently published snapshot, or the cleared state of a run in progress."""
    publisher = pipeline.publisher
    if publisher.snapshot is None:
        raise HTTPException(status_code=404, detail="No analysis has been run yet")
    return build_analysis_response(publisher.snapshot, loading=publisher.loading)


def run(reload: bool = False) -> None:
    """Serve the API with uvicorn on the configured port."""
    import uvicorn
    uvicorn.run("web3trends.main:app", host="0.0.0.0", port=settings.PORT, reload=reload)


if __name__ == "__main__":
    # For development
    run(reload=True)
