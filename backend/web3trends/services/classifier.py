"""
Gemini-powered structured classification of Web3 news articles.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

import httpx
from google import genai
from google.genai import errors, types

from web3trends.config import Settings
from web3trends.models import Classification, ClassificationResult

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """
Analyze the following Web3/blockchain news article for these factors:
1. Overall Sentiment (Positive, Negative, Neutral)
2. Token Price Impact (Bullish, Bearish, Neutral)
3. Developer Activity (High, Medium, Low)
4. Adoption Potential (High, Medium, Low)
5. Security Concerns (Detected, Not Detected)
6. Regulatory News (Favorable, Unfavorable, Neutral)
7. Sector (e.g., DeFi, NFT, Gaming, Infrastructure, Layer 1)

Title: {title}
Content: {content}

Provide the analysis in this exact JSON format, inside a json code block:
```json
{{
  "Overall_Sentiment": "value",
  "Token_Price_Impact": "value",
  "Developer_Activity": "value",
  "Adoption_Potential": "value",
  "Security_Concerns": "value",
  "Regulatory_News": "value",
  "Sector": "value"
}}
```
"""

# Financial and security news trips the default filters; let everything through.
SAFETY_SETTINGS: List[types.SafetySetting] = [
    types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
    for category in (
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
]

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


def build_prompt(content: str, title: str, char_limit: int) -> str:
    """
    Render the extraction prompt.

    Args:
        content: Article body (or description)
        title: Article title
        char_limit: Maximum number of content characters to include

    Returns:
        Prompt text
    """
    return PROMPT_TEMPLATE.format(title=title or "", content=(content or "")[:char_limit])


def extract_json_payload(text: str) -> Any:
    """
    Parse the JSON object from a model response.

    The first fenced code block is used when present, otherwise the whole text.

    Raises:
        ValueError: if the selected text is not valid JSON
    """
    match = _FENCED_BLOCK.search(text)
    json_string = match.group(1) if match else text
    return json.loads(json_string.strip())


def build_genai_client(settings: Settings) -> genai.Client:
    """Gemini client with the classifier timeout applied to every request."""
    timeout_ms = int(settings.CLASSIFIER_TIMEOUT_SECONDS * 1000)
    return genai.Client(
        api_key=settings.GEMINI_API_KEY,
        http_options=types.HttpOptions(timeout=timeout_ms),
    )


class GeminiClassifier:
    """Classifies one article per call; a failed call yields the default classification."""

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None):
        self.api_key = settings.GEMINI_API_KEY
        self.model = settings.GEMINI_MODEL
        self.char_limit = settings.CONTENT_CHAR_LIMIT
        if client is None and self.api_key:
            client = build_genai_client(settings)
        self._client = client

    async def classify(self, content: str, title: str) -> ClassificationResult:
        """
        Classify an article.

        Args:
            content: Article body, truncated to the configured prefix
            title: Article title

        Returns:
            ClassificationResult; ``defaulted`` is set when the model output
            could not be used
        """
        if self._client is None:
            return ClassificationResult.fallback("no Gemini API key configured")

        config = types.GenerateContentConfig(safety_settings=SAFETY_SETTINGS)

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=build_prompt(content, title, self.char_limit),
                config=config,
            )
        except errors.APIError as e:
            logger.warning("Gemini API error %s for %r: %s", e.code, title, e)
            return ClassificationResult.fallback(f"Gemini API error: {e.code}")
        except httpx.HTTPError as e:
            logger.warning("Error analyzing %r with Gemini: %s", title, e)
            return ClassificationResult.fallback(f"transport error: {type(e).__name__}")

        text = response.text
        if not text or not text.strip():
            logger.warning("Gemini response was blocked or empty for %r", title)
            return ClassificationResult.fallback("Gemini response was blocked or empty")

        try:
            classification = Classification.from_payload(extract_json_payload(text))
        except ValueError as e:
            logger.warning("Unusable Gemini output for %r: %s", title, e)
            return ClassificationResult.fallback(str(e))

        return ClassificationResult.parsed(classification)
