import asyncio
import logging

import google.generativeai as genai
from openai import OpenAI

from outflo.config import Settings
from outflo.core.exceptions import ExternalServiceError
from outflo.schemas.message import MessageRequest

logger = logging.getLogger(__name__)


def build_outreach_prompt(request: MessageRequest) -> str:
    """Deterministic prompt for a single outreach message."""
    return (
        f"Generate a concise and professional LinkedIn outreach message for {request.name}, "
        f"who is a {request.job_title} at {request.company_name} in {request.location}. "
        f"Their background summary is: \"{request.summary}\". "
        "The message should introduce and promote OutFlo, a tool that helps automate outreach "
        "to drive more meetings and increase sales. Aim to personalize the message and make it "
        "feel conversational.\n\n"
        "Return only the message as plain text, without any JSON or formatting."
    )


class MessageGenerator:
    """
    Writes outreach messages with Gemini, or OpenAI when Gemini is unavailable.
    One provider call per message; failures are not retried.
    """

    def __init__(self, settings: Settings):
        self.provider = None
        self.client = None
        self.model = settings.AI_MODEL

        if settings.GEMINI_API_KEY:
            try:
                genai.configure(api_key=settings.GEMINI_API_KEY)
                self.client = genai.GenerativeModel(settings.AI_MODEL)
                self.provider = "gemini"
                logger.info("Message generator initialized with Gemini")
            except Exception as e:
                logger.error(f"Failed to initialize Gemini: {e}")

        if not self.client and settings.OPENAI_API_KEY:
            try:
                self.client = OpenAI(api_key=settings.OPENAI_API_KEY)
                self.provider = "openai"
                self.model = settings.OPENAI_MODEL
                logger.info("Message generator initialized with OpenAI")
            except Exception as e:
                logger.error(f"Failed to initialize OpenAI: {e}")

        if not self.client:
            raise RuntimeError("No text generation provider configured: set GEMINI_API_KEY")

    def _generate_content(self, prompt: str) -> str:
        if self.provider == "gemini":
            response = self.client.generate_content(prompt)
            return response.text

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.7
        )
        return response.choices[0].message.content

    async def generate(self, request: MessageRequest) -> str:
        """Generate the outreach text for one person, returned verbatim."""
        prompt = build_outreach_prompt(request)
        loop = asyncio.get_running_loop()

        try:
            return await loop.run_in_executor(None, self._generate_content, prompt)
        except Exception as e:
            logger.error(f"{self.provider} generation failed: {e}")
            raise ExternalServiceError(
                self.provider,
                "Failed to generate personalized message",
                error=str(e)
            ) from e
