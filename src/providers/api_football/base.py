from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import Fixture


class FixturesProviderBase(ABC):
    """
    Interfaccia astratta per un provider di fixtures.

    Implementazioni concrete devono restituire la lista delle partite del giorno
    come oggetti Fixture, senza mai propagare errori della sorgente.
    """

    @abstractmethod
    async def fetch_fixtures(self, date: Optional[str] = None) -> List[Fixture]:
        """
        Recupera le fixtures dal provider.

        Parametri:
            date: (opzionale) data in formato YYYY-MM-DD; default oggi (UTC).

        Ritorna:
            Lista non vuota di Fixture.
        """
        raise NotImplementedError
