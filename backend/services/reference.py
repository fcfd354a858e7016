import logging
from typing import Iterable, List
from models.reference import Material, Staff
from repositories.base import Repository
from schemas.reference import MaterialRead

logger = logging.getLogger(__name__)

# Material master shipped with the app, loaded by seed_admin.py
DEFAULT_MATERIALS = [
    MaterialRead(code="E001", name="LED Bulb 10W"),
    MaterialRead(code="E002", name="LED Tube Light 20W"),
    MaterialRead(code="E003", name="MCB Single Pole"),
    MaterialRead(code="E004", name="Fan Capacitor"),
    MaterialRead(code="E005", name="Switch 6A"),
    MaterialRead(code="P001", name="PVC Pipe 1/2 inch"),
    MaterialRead(code="P002", name="Ball Valve 1/2 inch"),
    MaterialRead(code="P003", name="Tank Float Valve"),
    MaterialRead(code="P004", name="Sink Trap"),
    MaterialRead(code="P005", name="Water Tap"),
    MaterialRead(code="A001", name="AC Filter"),
    MaterialRead(code="A002", name="AC Gas R22"),
    MaterialRead(code="A003", name="AC Capacitor"),
    MaterialRead(code="A004", name="AC Fan Motor"),
    MaterialRead(code="A005", name="AC Remote Control"),
]


def list_materials(repo: Repository) -> List[Material]:
    return repo.list_materials()


def list_active_staff(repo: Repository) -> List[Staff]:
    return repo.list_active_staff()


def import_materials(repo: Repository, materials: Iterable[MaterialRead]) -> int:
    """Upsert the material master by code. Returns how many rows were written."""
    count = 0
    with repo.transaction():
        for item in materials:
            repo.save_material(Material(code=item.code.strip(), name=item.name.strip()))
            count += 1
    logger.info("Imported %d materials", count)
    return count
