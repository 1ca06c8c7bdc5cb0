"""Assistant module - AI document generators and the chat assistant."""

from .models import (
    ChatMessage,
    DonorMatchData,
    DonorMatchResult,
    MonthlyReportData,
    ProposalData,
    SourceCitation,
)
from .core import ChatSession, GenerationOrchestrator, extract_citations

__all__ = [
    "ChatMessage",
    "DonorMatchData",
    "DonorMatchResult",
    "MonthlyReportData",
    "ProposalData",
    "SourceCitation",
    "ChatSession",
    "GenerationOrchestrator",
    "extract_citations",
]
