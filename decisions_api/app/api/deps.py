"""
FastAPI dependencies shared by the endpoint modules.

Services are built per request from the application's database
provider.  Overriding ``get_database_provider`` (for example with an
``InMemoryDatabaseProvider`` in tests) swaps the backend for every
route at once.
"""

from fastapi import Depends

from ..db.provider import DatabaseProvider, get_database_provider
from ..repositories.decisions_repository import DecisionsRepository
from ..repositories.elected_officials_repository import ElectedOfficialsRepository
from ..services.decision_service import DecisionService
from ..services.elected_official_service import ElectedOfficialService


def get_decision_service(
    provider: DatabaseProvider = Depends(get_database_provider),
) -> DecisionService:
    return DecisionService(DecisionsRepository(provider))


def get_elected_official_service(
    provider: DatabaseProvider = Depends(get_database_provider),
) -> ElectedOfficialService:
    return ElectedOfficialService(ElectedOfficialsRepository(provider))
