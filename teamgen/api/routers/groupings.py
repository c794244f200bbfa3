# teamgen/api/routers/groupings.py
"""
Grouping endpoints: generate project groupings for a roster, preview group sizes.
"""
from typing import List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from teamgen.domain.models import ProjectGrouping, Student
from teamgen.services.grouping_service import GroupingService


router = APIRouter()
service = GroupingService()


class GenerateGroupingsReq(BaseModel):
    students: List[Student]
    project_names: List[str]
    prior_groupings: List[ProjectGrouping] = Field(default_factory=list)
    optimal_group_size: Optional[int] = None
    prefer_smaller_groups: Optional[bool] = None
    seed: Optional[int] = None


class GroupSizesReq(BaseModel):
    num_members: int
    optimal_group_size: Optional[int] = None
    prefer_smaller_groups: Optional[bool] = None


@router.post("/generate", summary="Generate groupings for every requested project")
def generate_groupings(req: GenerateGroupingsReq):
    options = service.options_for(req.optimal_group_size, req.prefer_smaller_groups, req.seed)
    try:
        run = service.generate(req.students, req.project_names, req.prior_groupings, options=options)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    body = run.grouping.model_dump(by_alias=True)
    body["repairings"] = run.repairings
    body["attempts"] = run.attempts
    return body


@router.post("/group-sizes", summary="Preview the group sizes for a roster size")
def group_sizes(req: GroupSizesReq):
    try:
        sizes = service.group_sizes(req.num_members, req.optimal_group_size, req.prefer_smaller_groups)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"num_members": req.num_members, "group_sizes": sizes}
