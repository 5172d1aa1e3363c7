from __future__ import annotations

import os
from abc import ABC, abstractmethod

from ..models.deployment import AnalysisResult
from ..utils.file_utils import sanitize_filename


class BaseExporter(ABC):
    """Abstract base class for file exporters.

    Subclasses should provide an EXTENSION and implement `export`.
    """

    EXTENSION: str = "txt"

    def default_path(self, result: AnalysisResult, report_dir: str) -> str:
        """``<report_dir>/recommendations-<context>-<timestamp>.<ext>``"""
        timestamp = result.generated_at.strftime("%Y-%m-%d-%H-%M-%S")
        parts = ["recommendations"]
        context = sanitize_filename(result.context)
        if context:
            parts.append(context)
        parts.append(timestamp)
        return os.path.join(report_dir, f"{'-'.join(parts)}.{self.EXTENSION}")

    @abstractmethod
    async def export(self, result: AnalysisResult, path: str) -> str:
        """Export the analysis result to disk. Return the written path."""
        raise NotImplementedError()
