# web3trends/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional, Dict, List

class ClassificationOut(BaseModel):
    # serialized with the same keys the model produces
    model_config = ConfigDict(populate_by_name=True)

    overall_sentiment: str = Field(alias="Overall_Sentiment")
    token_price_impact: str = Field(alias="Token_Price_Impact")
    developer_activity: str = Field(alias="Developer_Activity")
    adoption_potential: str = Field(alias="Adoption_Potential")
    security_concerns: str = Field(alias="Security_Concerns")
    regulatory_news: str = Field(alias="Regulatory_News")
    sector: str = Field(alias="Sector")

class ArticleOut(BaseModel):
    title: str
    display_title: str
    description: str = ""
    url: str
    published_at: datetime
    source_name: str = ""
    source_domain: str = ""
    classification: ClassificationOut
    defaulted: bool = False                   # True when the model output was unusable
    default_reason: Optional[str] = None

class SectorScoreOut(BaseModel):
    sector: Literal["DeFi", "NFTs/Gaming", "Infrastructure"]
    score: int = Field(ge=0, le=100)
    level: Literal["Low", "Medium", "High"]
    color: str

class PricePointOut(BaseModel):
    date: str
    close: str

class TopicPreset(BaseModel):
    label: str
    query: str

class AnalysisResponse(BaseModel):
    run_id: int
    topic: str
    as_of: str
    loading: bool = False
    n_articles: int
    articles: List[ArticleOut]
    sector_scores: List[SectorScoreOut]
    sentiment_distribution: Dict[str, int]
    price_series: List[PricePointOut]
    errors: List[str] = Field(default_factory=list)
