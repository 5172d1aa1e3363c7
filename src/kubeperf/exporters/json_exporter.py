import os

import aiofiles

from ..models.deployment import AnalysisResult
from .base_exporter import BaseExporter


class JSONExporter(BaseExporter):
    EXTENSION = "json"

    async def export(self, result: AnalysisResult, path: str) -> str:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        async with aiofiles.open(path, "w", encoding="utf-8") as fh:
            await fh.write(result.model_dump_json(indent=2))
        return path
