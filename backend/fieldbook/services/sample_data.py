"""Demo dataset for development installs"""

import logging
from datetime import datetime, timedelta

from fieldbook.models import MaterialTest, Project, Reminder
from fieldbook.services.entity_store import EntityStore

logger = logging.getLogger(__name__)


def seed_sample_data(store: EntityStore) -> bool:
    """
    Load three projects, three material tests and one reminder due in 24
    hours. Does nothing when projects already exist.

    Returns:
        True if the dataset was loaded
    """
    now = store.clock.now()

    with store.transaction():
        if store.count(Project):
            logger.info("Projects already present, skipping sample data")
            return False

        office = store.create(Project, {
            "name": "Downtown Office Complex",
            "description": "15-story commercial building with underground parking structure",
            "location": "Downtown LA",
            "status": "active",
            "type": "building",
            "created_at": datetime(2024, 11, 1),
        })
        store.create(Project, {
            "name": "Highway Bridge Inspection",
            "description": "Structural integrity assessment of 200ft span bridge",
            "location": "I-405 North",
            "status": "review",
            "type": "infrastructure",
            "created_at": datetime(2024, 10, 15),
        })
        store.create(Project, {
            "name": "Residential Foundation",
            "description": "Single-family home foundation inspection and documentation",
            "location": "Beverly Hills",
            "status": "complete",
            "type": "residential",
            "created_at": datetime(2024, 10, 1),
        })

        for name, category, specification in [
            ("Compressive Strength", "concrete", "Min 4000 PSI @ 28 days"),
            ("Slump Test", "concrete", '4" ± 1" per ACI 318'),
            ("Proctor Density", "soil", "95% max density, ±2% moisture"),
        ]:
            store.create(MaterialTest, {
                "name": name,
                "category": category,
                "specification": specification,
            })

        store.create(Reminder, {
            "project_id": office.id,
            "title": "599 Inspection Due",
            "type": "599",
            "scheduled_for": now + timedelta(days=1),
            "completed": False,
        })

    logger.info("Loaded sample data")
    return True
