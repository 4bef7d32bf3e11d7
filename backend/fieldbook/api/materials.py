"""Material test catalogue and test result endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from fieldbook.api.dependencies import get_materials_service
from fieldbook.models.material_test import MaterialCategory
from fieldbook.schemas.material_test import (
    MaterialTestCreate,
    MaterialTestResponse,
    MaterialTestUpdate,
    TestResultCreate,
    TestResultDetailResponse,
    TestResultResponse,
    TestResultUpdate,
)
from fieldbook.services.exceptions import NotFoundError
from fieldbook.services.materials_service import MaterialsService

router = APIRouter(prefix="/api", tags=["Materials"])


@router.get("/material-tests", response_model=List[MaterialTestResponse], status_code=status.HTTP_200_OK)
def get_material_tests(
    category: Optional[MaterialCategory] = Query(None, description="Only tests of this category"),
    service: MaterialsService = Depends(get_materials_service),
):
    """Get the material test catalogue"""
    return service.list_material_tests(category.value if category else None)


@router.get(
    "/material-tests/{test_id}",
    response_model=MaterialTestResponse,
    status_code=status.HTTP_200_OK,
)
def get_material_test(test_id: str, service: MaterialsService = Depends(get_materials_service)):
    return service.get_material_test(test_id)


@router.post("/material-tests", response_model=MaterialTestResponse, status_code=status.HTTP_201_CREATED)
def create_material_test(
    test: MaterialTestCreate,
    service: MaterialsService = Depends(get_materials_service),
):
    return service.create_material_test(test)


@router.patch(
    "/material-tests/{test_id}",
    response_model=MaterialTestResponse,
    status_code=status.HTTP_200_OK,
)
def update_material_test(
    test_id: str,
    test_update: MaterialTestUpdate,
    service: MaterialsService = Depends(get_materials_service),
):
    return service.update_material_test(test_id, test_update)


@router.delete("/material-tests/{test_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_material_test(test_id: str, service: MaterialsService = Depends(get_materials_service)):
    """Delete a catalogue entry; refused while test results reference it"""
    if not service.delete_material_test(test_id):
        raise NotFoundError("Material test", test_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/test-results", response_model=List[TestResultDetailResponse], status_code=status.HTTP_200_OK)
def get_test_results(
    project_id: Optional[str] = Query(None, description="Only results of this project"),
    service: MaterialsService = Depends(get_materials_service),
):
    """Get test results with project and test names"""
    return service.list_test_results(project_id)


@router.get(
    "/test-results/{result_id}",
    response_model=TestResultDetailResponse,
    status_code=status.HTTP_200_OK,
)
def get_test_result(result_id: str, service: MaterialsService = Depends(get_materials_service)):
    return service.get_test_result(result_id)


@router.post("/test-results", response_model=TestResultResponse, status_code=status.HTTP_201_CREATED)
def create_test_result(
    result: TestResultCreate,
    service: MaterialsService = Depends(get_materials_service),
):
    """Record a test result for a project"""
    return service.create_test_result(result)


@router.patch(
    "/test-results/{result_id}",
    response_model=TestResultResponse,
    status_code=status.HTTP_200_OK,
)
def update_test_result(
    result_id: str,
    result_update: TestResultUpdate,
    service: MaterialsService = Depends(get_materials_service),
):
    return service.update_test_result(result_id, result_update)


@router.delete("/test-results/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_test_result(result_id: str, service: MaterialsService = Depends(get_materials_service)):
    if not service.delete_test_result(result_id):
        raise NotFoundError("Test result", result_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
