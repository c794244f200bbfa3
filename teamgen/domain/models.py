# teamgen/domain/models.py
"""
Serializable structures exchanged with the outside world: rosters, prior groupings
and the generated class grouping.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List


class Student(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    net_id: str = Field(alias="netID")
    name: str = ""


class Group(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    members: List[Student] = Field(default_factory=list, alias="students")


class ProjectGrouping(BaseModel):
    name: str
    groups: List[Group] = Field(default_factory=list)


class ClassGrouping(BaseModel):
    projects: List[ProjectGrouping] = Field(default_factory=list)
