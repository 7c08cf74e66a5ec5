"""Parse profiling: wall time and resident memory per parse.

Examples:
    >>> profiler = ParseProfiler()
    >>> result = profiler.profile("<a><b>x</b></a>", session_id="small")
    >>> report = profiler.generate_report()
    >>> report.session_count
    1
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import psutil

from slimxml.api.parser import InputType, SlimXMLParser
from slimxml.api.result import ParseResult
from slimxml.shared.config import ParserConfig
from slimxml.shared.logging import get_logger


@dataclass
class ProfilingSession:
    """Measurements for one profiled parse."""

    session_id: str
    start_time: float
    end_time: float
    input_size: int
    memory_start: int
    memory_end: int
    success: bool = True
    element_count: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Change in resident set size, in bytes."""
        return self.memory_end - self.memory_start

    @property
    def throughput_mb_per_s(self) -> float:
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return (self.input_size / (1024 * 1024)) / duration_s

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "duration_ms": self.duration_ms,
            "input_size": self.input_size,
            "memory_delta": self.memory_delta,
            "throughput_mb_per_s": self.throughput_mb_per_s,
            "success": self.success,
            "element_count": self.element_count,
            "metadata": dict(self.metadata),
        }


@dataclass
class ProfileReport:
    """Aggregate over all sessions of a profiler."""

    sessions: List[ProfilingSession]
    generation_time: float = field(default_factory=time.time)

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    @property
    def average_duration_ms(self) -> float:
        if not self.sessions:
            return 0.0
        return sum(s.duration_ms for s in self.sessions) / len(self.sessions)

    @property
    def average_throughput_mb_per_s(self) -> float:
        if not self.sessions:
            return 0.0
        return sum(s.throughput_mb_per_s for s in self.sessions) / len(self.sessions)

    @property
    def peak_memory_delta(self) -> int:
        return max((s.memory_delta for s in self.sessions), default=0)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(
            {
                "session_count": self.session_count,
                "average_duration_ms": self.average_duration_ms,
                "average_throughput_mb_per_s": self.average_throughput_mb_per_s,
                "peak_memory_delta": self.peak_memory_delta,
                "sessions": [s.to_dict() for s in self.sessions],
            },
            indent=indent,
        )


class ParseProfiler:
    """Run parses and record how long they took and how much memory they used."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.parser = SlimXMLParser(config)
        self.sessions: List[ProfilingSession] = []
        self._process = psutil.Process()
        self.logger = get_logger(__name__, None, "parse_profiler")

    def _rss(self) -> int:
        return int(self._process.memory_info().rss)

    def profile(self, input_data: InputType, session_id: Optional[str] = None) -> ParseResult:
        """Parse ``input_data`` once and record a session for it."""
        session_id = session_id or f"session-{len(self.sessions) + 1}"
        input_size = len(input_data) if isinstance(input_data, (str, bytes)) else 0

        memory_start = self._rss()
        start_time = time.perf_counter()
        result = self.parser.parse(input_data)
        end_time = time.perf_counter()

        session = ProfilingSession(
            session_id=session_id,
            start_time=start_time,
            end_time=end_time,
            input_size=input_size or result.performance.characters_processed,
            memory_start=memory_start,
            memory_end=self._rss(),
            success=result.success,
            element_count=result.element_count,
        )
        self.sessions.append(session)
        self.logger.debug(
            "Profiled parse",
            extra={"session_id": session_id, "duration_ms": session.duration_ms},
        )
        return result

    def generate_report(self) -> ProfileReport:
        return ProfileReport(sessions=list(self.sessions))

    def clear(self) -> None:
        self.sessions.clear()
