"""Marketplace data models."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

PHASE_COMPLETED = "COMPLETED"
PHASE_REJECTED = "REJECTED"
PHASE_EXPIRED = "EXPIRED"
TERMINAL_PHASES = frozenset({PHASE_COMPLETED, PHASE_REJECTED, PHASE_EXPIRED})


@dataclass(frozen=True, slots=True)
class JobOffering:
    name: str
    price: float
    price_type: str
    requirement: str

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "price": self.price,
            "priceType": self.price_type,
            "requirement": self.requirement,
        }


@dataclass(frozen=True, slots=True)
class AgentProfile:
    id: str
    name: str
    wallet_address: str
    description: str
    graduation_status: str
    online_status: str
    job_offerings: tuple[JobOffering, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "walletAddress": self.wallet_address,
            "description": self.description,
            "graduationStatus": self.graduation_status,
            "onlineStatus": self.online_status,
            "jobOfferings": [offering.to_dict() for offering in self.job_offerings],
        }


@dataclass(frozen=True, slots=True)
class SwapRequest:
    from_symbol: str
    to_symbol: str
    amount: Decimal

    def as_requirements(self) -> dict[str, object]:
        """Service requirements payload for a ``swap_token`` job."""
        return {
            "fromSymbol": self.from_symbol,
            "toSymbol": self.to_symbol,
            "amount": float(self.amount),
        }

    def describe(self) -> str:
        return f"{self.amount} {self.from_symbol} -> {self.to_symbol}"


@dataclass(frozen=True, slots=True)
class Memo:
    next_phase: str
    content: str
    created_at: str
    status: str

    def to_dict(self) -> dict[str, str]:
        return {
            "nextPhase": self.next_phase,
            "content": self.content,
            "createdAt": self.created_at,
            "status": self.status,
        }


@dataclass(slots=True)
class Job:
    job_id: int
    phase: str
    deliverable: Any = None
    memo_history: list[Memo] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def latest_memo(self) -> Memo | None:
        if not self.memo_history:
            return None
        return self.memo_history[-1]

    def to_dict(self) -> dict[str, object]:
        return {
            "jobId": self.job_id,
            "phase": self.phase,
            "deliverable": self.deliverable,
            "memoHistory": [memo.to_dict() for memo in self.memo_history],
        }
