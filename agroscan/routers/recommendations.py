import logging
from fastapi import APIRouter, HTTPException
from starlette.concurrency import run_in_threadpool
from agroscan.models.schemas import RecommendRequest, RecommendResponse
from agroscan.services.advisor_service import recommend
from agroscan.services.rule_engine import evaluate

logger = logging.getLogger(__name__)
router = APIRouter(tags=["recommendations"])


@router.post("/recommend", response_model=RecommendResponse)
async def recommend_for_soil(request: RecommendRequest):
    if request.ph is None or request.moisture is None:
        raise HTTPException(status_code=400, detail="Soil pH and moisture required")

    try:
        rule_response = evaluate(request.ph, request.moisture, request.temperature)

        logger.info(f"Requesting AI recommendation for pH {request.ph}, moisture {request.moisture}")
        ai_response = await run_in_threadpool(
            recommend,
            request.ph,
            request.moisture,
            request.temperature,
            request.desired_crop
        )

        return RecommendResponse(ruleEngine=rule_response, aiResponse=ai_response)
    except Exception as e:
        logger.error(f"/recommend error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")
