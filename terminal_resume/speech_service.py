"""
Speech Service

Text-to-speech for assistant replies through the ElevenLabs API.
Audio comes back as a data URI the browser can play directly.
"""

import base64
import logging
from typing import Optional

import httpx

from . import config

logger = logging.getLogger(__name__)

ELEVENLABS_TTS_URL = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"


class SpeechService:
    """
    Service for text-to-speech synthesis.

    Requires an ElevenLabs API key; without one every call fails.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        voice_id: Optional[str] = None,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize speech service.

        Args:
            api_key: ElevenLabs API key (falls back to ELEVENLABS_API_KEY)
            voice_id: Voice to synthesize with (falls back to ELEVENLABS_VOICE_ID)
            timeout: Request timeout in seconds
            client: Preconfigured httpx client, mainly for tests
        """
        self.api_key = config.ELEVENLABS_API_KEY if api_key is None else api_key
        self.voice_id = voice_id or config.ELEVENLABS_VOICE_ID
        self.client = client or httpx.AsyncClient(timeout=timeout)

        if self.api_key:
            logger.info("Speech service initialized with ElevenLabs API")
        else:
            logger.warning("Speech service disabled (no API key)")

    async def synthesize(self, text: str) -> str:
        """
        Convert text to speech.

        Args:
            text: Text to speak

        Returns:
            data:audio/mpeg;base64 URI

        Raises:
            RuntimeError: If synthesis is not configured or fails
        """
        if not self.api_key:
            raise RuntimeError("Speech synthesis not configured")

        payload = {
            "text": text,
            "model_id": "eleven_monolingual_v1",
            "voice_settings": {
                "stability": 0.5,
                "similarity_boost": 0.5,
                "style": 0.0,
                "use_speaker_boost": True,
            },
        }
        headers = {
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
            "User-Agent": config.CLIENT_USER_AGENT,
            "xi-api-key": self.api_key,
        }

        try:
            response = await self.client.post(
                ELEVENLABS_TTS_URL.format(voice_id=self.voice_id),
                json=payload,
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Speech synthesis failed: {e}")
            raise RuntimeError("Speech synthesis failed") from e

        audio_data = response.content
        logger.info(f"Synthesized speech: {len(audio_data)} bytes")
        encoded = base64.b64encode(audio_data).decode("ascii")
        return f"data:audio/mpeg;base64,{encoded}"

    async def close(self):
        if self.client:
            await self.client.aclose()
