"""요금제 카탈로그.

주문 생성 시 plan_id 를 이 정적 카탈로그에서 찾아 금액/크레딧을 결정한다.
클라이언트가 보낸 금액이나 크레딧 수는 신뢰하지 않는다.
"""

from __future__ import annotations

from dataclasses import dataclass, field


CURRENCY = "INR"
CHECKOUT_NAME = "ContentAI"


@dataclass(frozen=True, slots=True)
class Plan:
    id: str
    name: str
    price: int  # 루피 단위 표시 가격
    credits: int
    features: tuple[str, ...] = field(default_factory=tuple)

    @property
    def amount(self) -> int:
        """결제사에 전달하는 최소 통화 단위(paise) 금액."""
        return self.price * 100


PLANS: tuple[Plan, ...] = (
    Plan(
        id="starter",
        name="Starter",
        price=1,
        credits=10,
        features=(
            "10 AI-generated content pieces",
            "Basic grammar checking",
            "Standard SEO suggestions",
            "Email support",
        ),
    ),
    Plan(
        id="professional",
        name="Professional",
        price=499,
        credits=30,
        features=(
            "30 AI-generated content pieces",
            "Advanced grammar & style checking",
            "Comprehensive SEO optimization",
            "Content scheduling",
            "Plagiarism checker",
            "Priority support",
        ),
    ),
    Plan(
        id="enterprise",
        name="Enterprise",
        price=999,
        credits=100,
        features=(
            "100 AI-generated content pieces",
            "Premium grammar & style checking",
            "Advanced SEO with competitor analysis",
            "Content scheduling & analytics",
            "Plagiarism checker",
            "Team collaboration",
            "Dedicated account manager",
        ),
    ),
)

_PLANS_BY_ID: dict[str, Plan] = {plan.id: plan for plan in PLANS}


def get_plan(plan_id: str) -> Plan | None:
    return _PLANS_BY_ID.get(plan_id)
