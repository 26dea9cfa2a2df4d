"""Invocation of the repository query tool and handling of its output."""

from .cache import CacheEntry, QuerySignature, RepoQueryCache
from .command import RepoQueryCommand
from .environment import YumEnvironment
from .params import RepoQueryParams
from .parser import RepoQueryOutputParser, RepoQueryRecord, select_single
from .process import ProcessOutput, ProcessRunner

__all__ = [
    "CacheEntry",
    "ProcessOutput",
    "ProcessRunner",
    "QuerySignature",
    "RepoQueryCache",
    "RepoQueryCommand",
    "RepoQueryOutputParser",
    "RepoQueryParams",
    "RepoQueryRecord",
    "YumEnvironment",
    "select_single",
]
