"""Assessment submission and result history routes."""

from fastapi import APIRouter

from relationship_wise.access import owned_assessment_result
from relationship_wise.api.deps import CurrentUser, Scorer, Store
from relationship_wise.api.schemas import AssessmentSubmitRequest
from relationship_wise.models.assessment import AssessmentResult

router = APIRouter(tags=["assessments"])


@router.post("/assessments/{assessment_id}/submit")
async def submit_assessment(
    assessment_id: str, body: AssessmentSubmitRequest, user: CurrentUser, scorer: Scorer
) -> AssessmentResult:
    return await scorer.submit(user.id, assessment_id, body.answers)


@router.get("/assessment-results")
async def list_results(user: CurrentUser, store: Store) -> list[AssessmentResult]:
    """Caller's results, newest first."""
    return store.list_user_assessment_results(user.id)


@router.get("/assessment-results/{result_id}")
async def get_result(result_id: str, user: CurrentUser, store: Store) -> AssessmentResult:
    return owned_assessment_result(store, user.id, result_id)
