"""Material test specifications and recorded test results"""

import logging
from typing import Any, Dict, List, Optional

from fieldbook.models import MaterialTest, Project, TestResult
from fieldbook.schemas.material_test import (
    MaterialTestCreate,
    MaterialTestUpdate,
    TestResultCreate,
    TestResultUpdate,
)
from fieldbook.services import derivations, queries
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.exceptions import IntegrityViolationError

logger = logging.getLogger(__name__)


class MaterialsService:
    """Service for the material test catalogue and project test results"""

    def __init__(self, store: EntityStore):
        self.store = store

    def list_material_tests(self, category: Optional[str] = None) -> List[MaterialTest]:
        """Catalogue entries, optionally only one category"""
        tests = self.store.list(MaterialTest, order_by=(MaterialTest.name, MaterialTest.id))
        if category is None:
            return tests
        return queries.by_category(tests, category)

    def get_material_test(self, test_id: str) -> MaterialTest:
        return self.store.get(MaterialTest, test_id)

    def create_material_test(self, data: MaterialTestCreate) -> MaterialTest:
        test = self.store.create(MaterialTest, data.fields())
        logger.info(f"Created material test {test.id} ({test.category}: {test.name})")
        return test

    def update_material_test(self, test_id: str, data: MaterialTestUpdate) -> MaterialTest:
        """Existing results keep pointing at the same test id, whatever its category"""
        test = self.store.update(MaterialTest, test_id, data.changes())
        logger.info(f"Updated material test {test_id}: {sorted(data.changes())}")
        return test

    def delete_material_test(self, test_id: str) -> bool:
        """
        Remove a catalogue entry.

        Raises:
            IntegrityViolationError: if test results still reference it
        """
        with self.store.transaction():
            if not self.store.exists(MaterialTest, test_id):
                return False

            referencing = self.store.count(TestResult, TestResult.material_test_id == test_id)
            if referencing:
                logger.warning(
                    f"Refused to delete material test {test_id}: {referencing} results reference it"
                )
                raise IntegrityViolationError(
                    f"Material test {test_id} is referenced by {referencing} test results",
                    field="material_test_id",
                    value=test_id,
                )

            self.store.delete(MaterialTest, test_id)

        logger.info(f"Deleted material test {test_id}")
        return True

    def list_test_results(self, project_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Results with ``project_name`` and ``test_name``, newest first"""
        criteria = [TestResult.project_id == project_id] if project_id else []
        with self.store.transaction():
            results = self.store.list(
                TestResult, *criteria, order_by=(TestResult.tested_at.desc(), TestResult.id)
            )
            projects = {project.id: project for project in self.store.list(Project)}
            tests = {test.id: test for test in self.store.list(MaterialTest)}

        return derivations.with_test_names(results, projects, tests)

    def get_test_result(self, result_id: str) -> Dict[str, Any]:
        with self.store.transaction():
            result = self.store.get(TestResult, result_id)
            project = self.store.find(Project, result.project_id)
            test = self.store.find(MaterialTest, result.material_test_id)

        projects = {project.id: project} if project else {}
        tests = {test.id: test} if test else {}
        return derivations.with_test_names([result], projects, tests)[0]

    def create_test_result(self, data: TestResultCreate) -> TestResult:
        with self.store.transaction():
            self._check_references(data.project_id, data.material_test_id)
            result = self.store.create(TestResult, data.fields())

        logger.info(
            f"Recorded {result.status} result {result.id} for test {result.material_test_id} "
            f"on project {result.project_id}"
        )
        return result

    def update_test_result(self, result_id: str, data: TestResultUpdate) -> TestResult:
        changes = data.changes()
        with self.store.transaction():
            self.store.get(TestResult, result_id)
            self._check_references(changes.get("project_id"), changes.get("material_test_id"))
            result = self.store.update(TestResult, result_id, changes)

        logger.info(f"Updated test result {result_id}: {sorted(changes)}")
        return result

    def delete_test_result(self, result_id: str) -> bool:
        deleted = self.store.delete(TestResult, result_id)
        if deleted:
            logger.info(f"Deleted test result {result_id}")
        return deleted

    def _check_references(self, project_id: Optional[str], material_test_id: Optional[str]) -> None:
        if project_id is not None:
            self.store.require_reference(Project, project_id, "project_id")
        if material_test_id is not None:
            self.store.require_reference(MaterialTest, material_test_id, "material_test_id")
