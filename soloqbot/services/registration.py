"""
Summoner registration for the /register command.
"""

import logging
from dataclasses import dataclass

from soloqbot.constants import RegistrationConstants
from soloqbot.services.registry_store import RegistryStore
from soloqbot.utils.exceptions import InvalidSummonerNameError, SummonerNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a registration."""
    provider_id: str
    display_name: str
    inserted: bool


class RegistrationService:
    """Validates a summoner name, resolves it on Riot and records it."""

    def __init__(self, store: RegistryStore, provider):
        self.store = store
        self.provider = provider

    @staticmethod
    def validate_name(name: str) -> str:
        """
        Normalize and validate a summoner name.

        Raises:
            InvalidSummonerNameError: If the name is outside the allowed length
        """
        clean = (name or "").strip()
        if not (RegistrationConstants.MIN_NAME_LENGTH <= len(clean) <= RegistrationConstants.MAX_NAME_LENGTH):
            raise InvalidSummonerNameError(clean)
        if clean.startswith('#') or clean.endswith('#'):
            raise InvalidSummonerNameError(clean)
        return clean

    async def register(self, name: str) -> RegistrationResult:
        """
        Register a summoner by name.

        Registering someone twice is not an error; ``inserted`` is False.

        Raises:
            InvalidSummonerNameError: Before any Riot call, for a bad name
            SummonerNotFoundError: If Riot does not know the name
            RankingProviderError: If Riot cannot be reached
            StoreError: If Redis cannot be reached
        """
        clean = self.validate_name(name)

        provider_id = await self.provider.resolve_identity(clean)
        if not provider_id:
            raise SummonerNotFoundError(clean)

        inserted = await self.store.register(provider_id, clean)
        if inserted:
            logger.info(f"Registered summoner {clean} ({provider_id})")
        else:
            logger.info(f"Summoner {clean} ({provider_id}) was already registered")
        return RegistrationResult(provider_id=provider_id, display_name=clean, inserted=inserted)
