import asyncio
import logging

import aiohttp

import config
from exceptions.remote import SummarizerUnavailableException
from models.order import OrderDTO
from models.product import ProductDTO
from services.analytics import AnalyticsService

logger = logging.getLogger(__name__)

NO_API_KEY_MESSAGE = "API key not found. Unable to generate insights."
UNAVAILABLE_MESSAGE = "分析服務暫時無法使用。"
EMPTY_RESPONSE_MESSAGE = "無法產生分析報告。"


class InsightService:
    """
    Daily business report from the Gemini generateContent REST endpoint.

    generate_insight never raises; every failure maps to a fixed message
    the cashier can read.
    """

    def __init__(self, api_key: str | None = None, model: str | None = None,
                 api_url: str | None = None, timeout: float | None = None):
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.model = model or config.GEMINI_MODEL
        self.api_url = (api_url or config.GEMINI_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.REMOTE_TIMEOUT_SECONDS

    async def _generate(self, prompt: str) -> str:
        """
        Raises:
            SummarizerUnavailableException: On transport or HTTP failure
        """
        url = f"{self.api_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as http:
                async with http.post(url, params={"key": self.api_key}, json=payload) as response:
                    if response.status >= 400:
                        raise SummarizerUnavailableException(f"HTTP {response.status}")
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SummarizerUnavailableException(str(e) or type(e).__name__) from e
        except ValueError as e:
            # 2xx with a non-JSON body (proxy or captive portal page)
            raise SummarizerUnavailableException(f"invalid JSON response: {e}") from e

        return self._extract_text(data)

    @staticmethod
    def _extract_text(data) -> str:
        """Text of the first candidate; "" for any shape that is not the documented one."""
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        return "".join(
            part["text"] for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ).strip()

    async def generate_insight(self, orders: list[OrderDTO], products: list[ProductDTO]) -> str:
        if not self.api_key:
            logger.info("Insight requested without GEMINI_API_KEY")
            return NO_API_KEY_MESSAGE

        summary = AnalyticsService.build_sales_summary(orders, products)
        prompt = AnalyticsService.build_prompt(AnalyticsService.format_summary_text(summary, products))

        try:
            text = await self._generate(prompt)
        except SummarizerUnavailableException as e:
            logger.warning(f"Insight generation failed: {e.reason}")
            return UNAVAILABLE_MESSAGE

        return text or EMPTY_RESPONSE_MESSAGE
