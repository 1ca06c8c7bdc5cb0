"""
npoconnect - Directory and AI toolkit for South African non-profits.

This package provides a filterable directory of non-profit organisations and
Gemini-backed tools for writing proposals and monthly reports, finding donors,
and chatting with an NPO consultant, plus a local deadline calendar.
"""

from .models import BankingDetails, FacetSets, FilterState, Organization, Task
from .dataset import load_organizations
from .directory import DirectoryView, index_facets, paginate, query
from .assistant import ChatSession, GenerationOrchestrator
from .tasks import LocalStorage, TaskStore

__version__ = "0.1.0"
__all__ = [
    "BankingDetails",
    "FacetSets",
    "FilterState",
    "Organization",
    "Task",
    "load_organizations",
    "DirectoryView",
    "index_facets",
    "paginate",
    "query",
    "ChatSession",
    "GenerationOrchestrator",
    "LocalStorage",
    "TaskStore",
]
