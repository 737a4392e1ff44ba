"""
Optional development seeding script.
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from datetime import date, timedelta
from app.core.database import AsyncSessionLocal, init_db, close_db
from app.handlers.projects import create_project
from app.models.project import ProjectCreate, RoofType


SAMPLE_PROJECTS = [
    dict(name="Silva residence", roof_type=RoofType.CERAMIC, inverter_power_kw=3.3, panel_count=6,
         inverter_brand="Growatt", installer="Carlos"),
    dict(name="North warehouse", roof_type=RoofType.METAL, inverter_power_kw=11.0, panel_count=20,
         inverter_brand="Fronius", installer="Ana"),
    dict(name="Boa Vista farm", roof_type=RoofType.GROUND_MOUNT, inverter_power_kw=6.0, panel_count=12,
         inverter_brand="Solis", installer="Carlos"),
    dict(name="Municipal school", roof_type=RoofType.FIBER_CEMENT, inverter_power_kw=8.0, panel_count=14),
]


async def seed_data():
    """Seed database with sample projects for development."""
    await init_db()

    async with AsyncSessionLocal() as session:
        for offset, fields in enumerate(SAMPLE_PROJECTS):
            project = await create_project(
                session,
                ProjectCreate(
                    installation_date=date.today() + timedelta(days=7 * (offset + 1)),
                    **fields
                )
            )
            print(f"Created project {project.id}: {project.name} ({project.total_items} checklist items)")

    await close_db()
    print("Seed data created successfully!")


if __name__ == "__main__":
    asyncio.run(seed_data())
