"""
Assistant Client

Answers visitor questions as "Alex" through the OpenAI chat completions API.
Falls back to canned answers when no API key is configured or OpenAI fails.
"""

import logging
import random
from typing import Dict, List, Optional

import httpx

from . import config

logger = logging.getLogger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
EMPTY_REPLY = "Neural link unstable. Please retry."

SYSTEM_PROMPT = (
    'You are "Alex", Joshua Lossner\'s AI career advisor and tech mentor. '
    "Be practical, professional and approachable. Answer questions about "
    "software engineering careers, technical skills, system architecture and "
    "Joshua's background. Keep responses under 200 words unless asked for detail."
)

# (keywords, replies) checked in order; first keyword hit wins
CANNED_REPLIES = [
    (("job", "career", "interview"), [
        "Best career advice I know: build things people actually use. Side projects speak louder than any resume bullet point.",
        "Interview prep? Practice problems, yes, but also prepare stories about systems you've built and problems you've solved.",
    ]),
    (("technology", "tech", "programming", "coding"), [
        "Choose boring technology for production and experiment with cutting-edge stuff for learning. Users care about reliability.",
        "Write code like a letter to your future self: clear, documented and tested.",
    ]),
    (("skill", "learn", "study"), [
        "Want to level up fast? Build something real, even if it's small, and teach others what you learn.",
        "Focus on fundamentals like system design and debugging. Frameworks come and go.",
    ]),
    (("project", "build", "idea"), [
        "The best projects solve problems you actually have. Start small, ship fast, iterate on real feedback.",
    ]),
    (("joshua", "experience", "background"), [
        "Joshua combines deep technical knowledge with the ability to explain complex systems simply. Check the Experience section for details.",
    ]),
]

DEFAULT_REPLIES = [
    "Interesting question! I'm Alex, Joshua's AI assistant. Ask me about tech, careers or Joshua's work.",
    "Good question! I'm all about practical advice. What specifically would you like to know more about?",
]


class AssistantAuthError(RuntimeError):
    """OpenAI rejected the configured API key."""


class AIClient:
    """
    Client for the "Alex" assistant.

    Priority: OpenAI (when a key is configured) -> canned replies.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        project_id: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = config.OPENAI_API_KEY if api_key is None else api_key
        self.project_id = config.OPENAI_PROJECT_ID if project_id is None else project_id
        self.model = model or config.OPENAI_MODEL
        self.client = client or httpx.AsyncClient(timeout=timeout or config.HTTP_TIMEOUT)

        logger.info("AI Client Initialized.")
        if self.api_key:
            logger.info("  - OpenAI Link: ACTIVE (Primary)")
        else:
            logger.warning("  - OpenAI Link: INACTIVE (No Key Found)")

    async def ask(self, message: str) -> str:
        """
        Answer a single question.

        Raises:
            AssistantAuthError: OpenAI answered 401 for the configured key
        """
        if not self.api_key:
            return self._canned_response(message)

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": message},
        ]
        try:
            return await self._chat_openai(messages)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 401:
                raise AssistantAuthError("Invalid OpenAI API key. Please check configuration.") from e
            logger.error(f"OpenAI Connection Failed: {e}")
        except httpx.HTTPError as e:
            logger.error(f"OpenAI Connection Failed: {e}")

        return self._canned_response(message)

    async def _chat_openai(self, messages: List[Dict[str, str]]) -> str:
        """Direct connection to OpenAI."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "User-Agent": config.CLIENT_USER_AGENT,
        }
        if self.project_id:
            headers["OpenAI-Project"] = self.project_id
        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": 300,
            "temperature": 0.7,
        }

        response = await self.client.post(OPENAI_CHAT_URL, json=payload, headers=headers)
        response.raise_for_status()
        data = response.json()
        choices = data.get("choices") or [{}]
        return (choices[0].get("message") or {}).get("content") or EMPTY_REPLY

    def _canned_response(self, message: str) -> str:
        lowered = (message or "").lower()
        for keywords, replies in CANNED_REPLIES:
            if any(word in lowered for word in keywords):
                return random.choice(replies)
        return random.choice(DEFAULT_REPLIES)

    async def close(self):
        if self.client:
            await self.client.aclose()
