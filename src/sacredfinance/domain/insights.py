"""AI insight generator for the monthly closing.

Sends a single prompt to Google Gemini. Any failure degrades to a fixed
fallback message; the caller never sees an exception and nothing is retried.
"""

import logging
import os
from typing import Optional

import google.generativeai as genai

from sacredfinance.domain.errors import InsightServiceUnavailable
from sacredfinance.domain.reports import ClosingSummary

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Unable to generate AI insights at this time."
DEFAULT_MODEL = "gemini-1.5-flash"
REQUEST_TIMEOUT = 30.0

PROMPT_TEMPLATE = """Provide a concise financial health summary for our church for the month of {month}.
Total Income: ${total_income:,.2f}
Total Expenses: ${total_expenses:,.2f}
Net: ${net_balance:,.2f}.
Offer advice on charity allocation or expense management. Keep it encouraging and professional."""


def build_prompt(summary: ClosingSummary) -> str:
    return PROMPT_TEMPLATE.format(
        month=summary.month,
        total_income=summary.total_income,
        total_expenses=summary.total_expenses,
        net_balance=summary.net_balance,
    )


class InsightService:
    """Generates a short free-text summary of the closing totals."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize insight service.

        Args:
            api_key: Gemini API key. If None, reads GEMINI_API_KEY
            model_name: Gemini model. If None, reads SACREDFINANCE_INSIGHT_MODEL,
                then falls back to DEFAULT_MODEL
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        self.model_name = model_name or os.environ.get("SACREDFINANCE_INSIGHT_MODEL", DEFAULT_MODEL)
        self.timeout = timeout

    def _request(self, prompt: str) -> str:
        if not self.api_key:
            raise InsightServiceUnavailable("GEMINI_API_KEY is not configured")

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={"temperature": 0.7},
        )
        response = model.generate_content(prompt, request_options={"timeout": self.timeout})
        text = (response.text or "").strip()
        if not text:
            raise InsightServiceUnavailable("Empty response from insight service")
        return text

    def generate(self, summary: ClosingSummary) -> str:
        """Return an AI summary of ``summary``, or the fallback message."""
        try:
            return self._request(build_prompt(summary))
        except Exception as exc:
            logger.warning("Insight generation failed: %s", exc)
            return FALLBACK_MESSAGE
