"""Read-only catalog routes: learning modules and assessments."""

from fastapi import APIRouter

from relationship_wise.api.deps import CurrentUser, Store
from relationship_wise.models.catalog import Assessment, LearningModule

router = APIRouter(tags=["catalog"])


@router.get("/modules")
async def list_modules(user: CurrentUser, store: Store) -> list[LearningModule]:
    return store.list_learning_modules()


@router.get("/modules/{module_id}")
async def get_module(module_id: str, user: CurrentUser, store: Store) -> LearningModule:
    return store.get_learning_module(module_id)


@router.get("/assessments")
async def list_assessments(user: CurrentUser, store: Store) -> list[Assessment]:
    return store.list_assessments()


@router.get("/assessments/{assessment_id}")
async def get_assessment(assessment_id: str, user: CurrentUser, store: Store) -> Assessment:
    return store.get_assessment(assessment_id)
