"""
Comparison analysis endpoints.

A comparison groups existing projects under a name and analysis type. When
the caller supplies no results, per-project summaries ranked by stored total
energy output are computed at creation time.

CHANGELOG:
- 2026-10-18: Initial creation
"""

import logging

from fastapi import APIRouter, HTTPException

from astrosolar.api.deps import StorageDep
from astrosolar.services.comparison import summarize_projects
from astrosolar.storage.models import Comparison, ComparisonCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/comparisons", tags=["comparisons"])


@router.get("", response_model=list[Comparison])
async def list_comparisons(storage: StorageDep) -> list[Comparison]:
    return await storage.list_comparisons()


@router.post("", response_model=Comparison, status_code=201)
async def create_comparison(body: ComparisonCreate, storage: StorageDep) -> Comparison:
    """Create a comparison of existing projects.

    Raises:
        HTTPException: 404 if any referenced project does not exist.
    """
    projects = []
    for project_id in body.project_ids:
        project = await storage.get_project(project_id)
        if project is None:
            raise HTTPException(
                status_code=404, detail=f"Project not found: {project_id}"
            )
        projects.append(project)

    if body.results is None:
        body = body.model_copy(update={"results": summarize_projects(projects)})

    comparison = await storage.create_comparison(body)
    logger.info(
        "Created comparison %s over %d projects", comparison.id, len(projects)
    )
    return comparison


@router.get("/{comparison_id}", response_model=Comparison)
async def get_comparison(comparison_id: str, storage: StorageDep) -> Comparison:
    comparison = await storage.get_comparison(comparison_id)
    if comparison is None:
        raise HTTPException(status_code=404, detail="Comparison not found")
    return comparison
