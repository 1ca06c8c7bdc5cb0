"""Core assistant functionality - document generation and the chat assistant."""

import asyncio
import logging
from typing import Iterator, Optional

from ..config import DEFAULT_MODEL
from ..errors import GenerationFailed, StreamError
from .models import (
    ChatMessage,
    DonorMatchData,
    DonorMatchResult,
    GenerationRequest,
    MonthlyReportData,
    ProposalData,
    SourceCitation,
)
from .prompts import (
    CHAT_GREETING,
    CHAT_INIT_ERROR,
    CHAT_STREAM_ERROR,
    CHAT_SYSTEM_INSTRUCTION,
    build_donor_match_prompt,
    build_monthly_report_prompt,
    build_proposal_prompt,
)

logger = logging.getLogger(__name__)


# =============================================================================
# GROUNDING METADATA
# =============================================================================

def extract_citations(response) -> list:
    """Collect the web sources a search-grounded response cites.

    Chunks without a web reference are skipped and repeated sources are
    listed once, in first-seen order.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    if not metadata:
        return []

    citations = []
    seen = set()
    for chunk in getattr(metadata, "grounding_chunks", None) or []:
        web = getattr(chunk, "web", None)
        if not web:
            continue
        uri = getattr(web, "uri", None)
        if not uri:
            continue
        citation = SourceCitation(title=getattr(web, "title", None) or uri, uri=uri)
        if citation not in seen:
            seen.add(citation)
            citations.append(citation)
    return citations


def _response_text(response) -> Optional[str]:
    try:
        return response.text
    except (AttributeError, TypeError, ValueError) as e:
        logger.debug(f"Could not read response text: {e}")
        return None


# =============================================================================
# DOCUMENT GENERATION
# =============================================================================

class GenerationOrchestrator:
    """Generates proposals, monthly reports and donor matches with Gemini."""

    def __init__(self, client, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model

    def generate(self, request: GenerationRequest):
        """Dispatch a form payload to its generator.

        Returns:
            Generated text, or a DonorMatchResult for donor matching
        """
        if isinstance(request, ProposalData):
            return self.generate_proposal(request)
        if isinstance(request, MonthlyReportData):
            return self.generate_monthly_report(request)
        if isinstance(request, DonorMatchData):
            return self.find_donors(request)
        raise TypeError(f"Unsupported generation request: {type(request).__name__}")

    async def agenerate(self, request: GenerationRequest):
        """Awaitable ``generate``; the blocking call runs in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.generate, request)

    def generate_proposal(self, data: ProposalData) -> str:
        self._require_fields(data, "proposal generation")
        response = self._call(build_proposal_prompt(data), "proposal generation")
        return _response_text(response)

    def generate_monthly_report(self, data: MonthlyReportData) -> str:
        self._require_fields(data, "monthly report generation")
        response = self._call(build_monthly_report_prompt(data), "monthly report generation")
        return _response_text(response)

    def find_donors(self, data: DonorMatchData) -> DonorMatchResult:
        """Search-grounded donor recommendations with their sources."""
        from google.genai import types

        self._require_fields(data, "donor matching")
        config = types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )
        response = self._call(build_donor_match_prompt(data), "donor matching", config=config)
        sources = extract_citations(response)
        logger.info(f"Donor matching returned {len(sources)} sources")
        return DonorMatchResult(text=_response_text(response), sources=sources)

    def _call(self, prompt: str, context: str, config=None):
        """Run one blocking completion; returns a response with non-empty text."""
        kwargs = {"model": self.model, "contents": prompt}
        if config is not None:
            kwargs["config"] = config

        try:
            response = self.client.models.generate_content(**kwargs)
        except Exception as e:
            logger.error(f"Gemini API call failed during {context}: {e}")
            raise GenerationFailed(f"Failed to {context} due to an API error.") from e

        text = _response_text(response)
        if not text or not text.strip():
            logger.error(f"Gemini returned an empty response during {context}")
            raise GenerationFailed(f"Failed to {context}: the AI service returned an empty response.")
        return response

    @staticmethod
    def _require_fields(data, context: str) -> None:
        missing = data.missing_fields()
        if missing:
            raise GenerationFailed(
                f"Cannot start {context}; required fields are empty: {', '.join(missing)}"
            )


# =============================================================================
# CHAT ASSISTANT
# =============================================================================

class ChatSession:
    """One conversation with the NPO consultant persona.

    The transcript lives as long as the session and is never persisted.
    """

    def __init__(self, client, model: str = DEFAULT_MODEL):
        self.transcript: list = []
        self.last_error: Optional[StreamError] = None
        self.is_loading = True
        self._chat = None

        try:
            from google.genai import types
            self._chat = client.chats.create(
                model=model,
                config=types.GenerateContentConfig(
                    system_instruction=CHAT_SYSTEM_INSTRUCTION,
                ),
            )
            self.transcript.append(ChatMessage(role="model", text=CHAT_GREETING))
        except Exception as e:
            logger.error(f"Failed to initialize chat: {e}")
            self.last_error = StreamError(f"Chat could not be initialized: {e}")
            self.transcript.append(ChatMessage(role="model", text=CHAT_INIT_ERROR))
        finally:
            self.is_loading = False

    @property
    def ready(self) -> bool:
        return self._chat is not None

    def send(self, message: str) -> Iterator[str]:
        """Stream the assistant's reply to ``message``.

        Yields the whole reply so far after each chunk; the last transcript
        entry is kept equal to the latest yielded value. Use ``stream`` for
        just the new text of each chunk. Blank messages, and messages sent
        while a reply is still streaming, are ignored.

        Nothing is recorded or sent until the generator is first advanced.
        """
        if not message.strip() or not self.ready or self.is_loading:
            return

        self.transcript.append(ChatMessage(role="user", text=message))
        self.transcript.append(ChatMessage(role="model", text=""))
        self.is_loading = True
        self.last_error = None

        current = ""
        try:
            for chunk in self._chat.send_message_stream(message):
                text = chunk.text
                if text:
                    current += text
                    self.transcript[-1] = ChatMessage(role="model", text=current)
                    yield current
        except Exception as e:
            logger.error(f"Chat API error: {e}")
            self.last_error = StreamError(str(e))
            last = self.transcript[-1]
            if last.role == "model" and last.text == "":
                self.transcript[-1] = ChatMessage(role="model", text=CHAT_STREAM_ERROR)
            else:
                self.transcript.append(ChatMessage(role="model", text=CHAT_STREAM_ERROR))
        finally:
            self.is_loading = False

    def stream(self, message: str) -> Iterator[str]:
        """Like ``send``, but yields only the text each chunk added."""
        shown = 0
        for text in self.send(message):
            yield text[shown:]
            shown = len(text)

    def reply(self, message: str) -> str:
        """Send ``message`` and return the final assistant entry."""
        for _ in self.send(message):
            pass
        return self.transcript[-1].text
