"""Fallback State - Per-call engine selection state

오케스트레이터 호출 1회에 한정된 상태입니다. 프로세스 전역에 두지 않아
동시에 처리되는 서로 다른 검색이 서로 영향을 주지 않습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class OrchestratorState(str, Enum):
    """오케스트레이터 상태

    Idle → Validated → Selecting → Running → {Done, Exhausted}
    """

    IDLE = "idle"
    VALIDATED = "validated"
    SELECTING = "selecting"
    RUNNING = "running"
    DONE = "done"
    EXHAUSTED = "exhausted"


@dataclass
class FallbackState:
    """엔진 폴백 상태

    Attributes:
        candidates: 호출자가 지정한 순서의 후보 엔진
        tried: 이미 선택된 엔진 (선택 시점에 추가, 결과와 무관)
        current: 현재 실행 중인 엔진
        status: 상태 머신 위치
    """

    candidates: tuple[str, ...]
    tried: set[str] = field(default_factory=set)
    current: Optional[str] = None
    status: OrchestratorState = OrchestratorState.IDLE

    def remaining(self) -> list[str]:
        return [name for name in self.candidates if name not in self.tried]

    def has_next(self) -> bool:
        return bool(self.remaining())

    def mark_tried(self, name: str) -> None:
        if name not in self.candidates:
            raise ValueError(f"Engine {name!r} is not one of the candidates")
        self.tried.add(name)

    def reset(self) -> None:
        """이미 시도한 엔진 목록 초기화 - 같은 엔진들을 다시 호출할 수 있게 됩니다."""
        self.tried.clear()
        self.current = None
        self.status = OrchestratorState.VALIDATED
