"""
Twelve Data daily price series fetcher.
"""
from __future__ import annotations

from typing import List, Optional

import httpx

from web3trends.config import Settings
from web3trends.models import PricePoint
from web3trends.sources.common import build_client


class MarketDataError(Exception):
    """The market data provider did not return a usable series."""


class TwelveDataFetcher:
    """Fetches a short daily close series for the configured symbol."""

    INTERVAL = "1day"

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = settings.TWELVE_DATA_URL
        self.symbol = settings.PRICE_SYMBOL
        self.output_size = settings.PRICE_OUTPUT_SIZE
        self.api_key = settings.TWELVE_DATA_API_KEY
        self.timeout = settings.MARKET_TIMEOUT_SECONDS
        self._transport = transport

    async def fetch_price_series(self) -> List[PricePoint]:
        """
        Fetch the daily series in ascending date order.

        Returns:
            List of PricePoint objects, oldest first

        Raises:
            MarketDataError: on transport failure, non-success status, an
                error payload or a missing values collection
        """
        params = {
            "symbol": self.symbol,
            "interval": self.INTERVAL,
            "outputsize": self.output_size,
            "apikey": self.api_key,
        }

        try:
            async with build_client(self.timeout, self._transport) as client:
                response = await client.get(self.url, params=params)
        except httpx.HTTPError as e:
            raise MarketDataError(f"Market data request failed: {e}") from e

        if not response.is_success:
            raise MarketDataError("Failed to fetch market data from Twelve Data API")

        try:
            data = response.json()
        except ValueError as e:
            raise MarketDataError("Invalid market data returned") from e

        if not isinstance(data, dict) or data.get("status") == "error" or not data.get("values"):
            message = data.get("message") if isinstance(data, dict) else None
            raise MarketDataError(message or "Invalid market data returned")

        try:
            points = [
                PricePoint(date=str(value["datetime"]), close=str(value["close"]))
                for value in data["values"]
            ]
        except (KeyError, TypeError) as e:
            raise MarketDataError(f"Malformed market data point: {e}") from e

        # Provider sends newest first
        points.reverse()
        return points
