"""Material test and test result schemas"""

from typing import ClassVar, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from fieldbook.models.material_test import MaterialCategory, TestResultStatus
from fieldbook.schemas.common import CreateSchema, PartialUpdate


class MaterialTestCreate(CreateSchema):
    name: str = Field(..., min_length=1, max_length=255)
    category: MaterialCategory
    specification: str = Field(..., min_length=1)


class MaterialTestUpdate(PartialUpdate):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[MaterialCategory] = None
    specification: Optional[str] = Field(None, min_length=1)

    non_nullable: ClassVar = frozenset({"name", "category", "specification"})


class MaterialTestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    specification: str
    created_at: datetime
    updated_at: datetime


class TestResultCreate(CreateSchema):
    project_id: str = Field(..., min_length=1)
    material_test_id: str = Field(..., min_length=1)
    result: str = Field(..., min_length=1, description="Measured value or observation")
    status: TestResultStatus


class TestResultUpdate(PartialUpdate):
    project_id: Optional[str] = Field(None, min_length=1)
    material_test_id: Optional[str] = Field(None, min_length=1)
    result: Optional[str] = Field(None, min_length=1)
    status: Optional[TestResultStatus] = None

    non_nullable: ClassVar = frozenset({"project_id", "material_test_id", "result", "status"})


class TestResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    material_test_id: str
    result: str
    status: str
    tested_at: datetime


class TestResultDetailResponse(TestResultResponse):
    """Test result joined with project and test names"""
    project_name: str
    test_name: str
