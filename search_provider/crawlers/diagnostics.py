"""진단 아티팩트 저장소

추출이 반복 실패하면 마지막으로 받은 페이지를 디렉터리에 남겨 오프라인으로 확인합니다.
쓰기 전용이며 코어는 이 파일을 다시 읽지 않습니다.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional, Union

from search_provider.core.config import settings
from search_provider.core.logging import logger


class DiagnosticArtifactSink:
    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory or settings.engine_result_directory)

    def write(self, page_content: str) -> Optional[Path]:
        """페이지 스냅샷 저장

        Returns:
            저장된 파일 경로, 내용이 없거나 쓰기에 실패하면 None
        """
        if not page_content:
            return None

        path = self.directory / f"{uuid.uuid4().hex}.html"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(page_content, encoding="utf-8")
        except OSError as e:
            logger.error(f"[DIAGNOSTICS] Could not write page snapshot to {path}: {e}")
            return None

        return path
