from __future__ import annotations

from fastapi import APIRouter

from ..schemas.orders import PlanResponse
from ...models.plan import CURRENCY, PLANS


router = APIRouter()


@router.get("")
def list_plans() -> list[PlanResponse]:
    return [
        PlanResponse(
            id=plan.id,
            name=plan.name,
            price=plan.price,
            credits=plan.credits,
            currency=CURRENCY,
            features=list(plan.features),
        )
        for plan in PLANS
    ]
