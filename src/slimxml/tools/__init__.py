"""Developer tools for slimxml."""

from .profiling import ParseProfiler, ProfileReport, ProfilingSession

__all__ = ["ParseProfiler", "ProfileReport", "ProfilingSession"]
