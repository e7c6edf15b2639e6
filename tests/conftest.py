"""
Pytest fixtures for the SoloQ leaderboard bot.

Unit tests run against in-memory fakes of the bot's collaborators:
- FakeRedis: the subset of ``redis.asyncio.Redis`` the registry store uses
- FakeChatClient: records create/edit/delete calls
- FakeRankingProvider: canned Riot responses, failures and delays
- FakeInteraction: records deferrals, replies and response edits
"""

import asyncio
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest

from soloqbot.cogs.leaderboard import LeaderboardCog
from soloqbot.config import Config
from soloqbot.constants import RiotConstants
from soloqbot.data_models.ranked import Division, RankedEntry, Tier
from soloqbot.services.leaderboard import LeaderboardService
from soloqbot.services.rate_limiter import SimpleRateLimiter
from soloqbot.services.registration import RegistrationService
from soloqbot.services.registry_store import RegistryStore
from soloqbot.services.scoreboard_state import ScoreboardState


class FakeRedis:
    """Dict-backed stand-in for the Redis commands used by RegistryStore."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.fail_with: Optional[Exception] = None
        self.failures_left = 0
        self.calls = 0

    def _maybe_fail(self):
        self.calls += 1
        if self.fail_with is not None and self.failures_left > 0:
            self.failures_left -= 1
            raise self.fail_with

    def fail(self, error: Exception, times: int = 1):
        self.fail_with = error
        self.failures_left = times

    async def ping(self):
        self._maybe_fail()
        return True

    async def get(self, key):
        self._maybe_fail()
        return self.data.get(key)

    async def mget(self, keys):
        self._maybe_fail()
        await asyncio.sleep(0)
        return [self.data.get(key) for key in keys]

    async def set(self, key, value, nx=False):
        self._maybe_fail()
        # Yield so concurrent registrations really interleave
        await asyncio.sleep(0)
        if nx and key in self.data:
            return None
        self.data[key] = str(value)
        return True

    async def mset(self, mapping):
        self._maybe_fail()
        self.data.update({key: str(value) for key, value in mapping.items()})
        return True

    async def scan_iter(self, count=None):
        self._maybe_fail()
        for key in list(self.data):
            yield key


class FakeChatClient:
    """Records outbound Discord calls."""

    def __init__(self):
        self.created: List[tuple] = []
        self.edits: List[dict] = []
        self.deleted: List[tuple] = []
        self.next_message_id = 1000
        self.create_gate: Optional[asyncio.Event] = None
        self.create_error: Optional[Exception] = None
        self.edit_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None

    async def create_message(self, channel_id, content):
        if self.create_gate is not None:
            await self.create_gate.wait()
        if self.create_error is not None:
            raise self.create_error
        self.next_message_id += 1
        self.created.append((channel_id, self.next_message_id, content))
        return self.next_message_id

    async def edit_message(self, channel_id, message_id, *, content=None, embed=None):
        if self.edit_error is not None:
            raise self.edit_error
        self.edits.append({
            "channel_id": channel_id,
            "message_id": message_id,
            "content": content,
            "embed": embed,
        })

    async def delete_message(self, channel_id, message_id):
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.append((channel_id, message_id))


class FakeRankingProvider:
    """Canned Riot responses keyed by provider id."""

    def __init__(self):
        self.accounts: Dict[str, str] = {}
        self.entries: Dict[str, object] = {}
        self.delays: Dict[str, float] = {}
        self.gate: Optional[asyncio.Event] = None
        self.resolve_calls: List[str] = []
        self.lookup_calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def resolve_identity(self, name):
        self.resolve_calls.append(name)
        result = self.accounts.get(name)
        if isinstance(result, Exception):
            raise result
        return result

    async def get_ranked_entries(self, provider_id, fallback_name=""):
        self.lookup_calls.append(provider_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            if provider_id in self.delays:
                await asyncio.sleep(self.delays[provider_id])
            result = self.entries.get(provider_id, [])
            if isinstance(result, Exception):
                raise result
            return list(result)
        finally:
            self.in_flight -= 1


def build_entry(name: str, tier: Optional[Tier] = Tier.GOLD, division: Optional[Division] = Division.II,
                points: int = 0, wins: int = 10, losses: int = 10, veteran: bool = False,
                hot_streak: bool = False, queue_type: str = RiotConstants.RANKED_SOLO_QUEUE) -> RankedEntry:
    return RankedEntry(
        identity_name=name,
        tier=tier,
        division=division,
        points=points,
        wins=wins,
        losses=losses,
        is_veteran=veteran,
        has_hot_streak=hot_streak,
        queue_type=queue_type,
        provider_id=f"puuid-{name}",
    )


@pytest.fixture
def make_entry():
    """Factory for ranked entries (Gold II, 0 LP, solo queue by default)."""
    return build_entry


@pytest.fixture
def config():
    return Config(
        discord_token="token",
        riot_api_key="RGAPI-test",
        redis_url="redis://localhost:6379",
        leaderboard_size=10,
        lookup_timeout=0.2,
    )


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def chat():
    return FakeChatClient()


@pytest.fixture
def provider():
    return FakeRankingProvider()


@pytest.fixture
def store(fake_redis):
    return RegistryStore(fake_redis)


@pytest.fixture
def state(store, chat):
    return ScoreboardState(store, chat)


@pytest.fixture
def service(config, store, state, provider, chat):
    return LeaderboardService(config, store, state, provider, chat)


@pytest.fixture
def registration(store, provider):
    return RegistrationService(store, provider)


class FakeInteraction:
    """Records what a slash command sends back to Discord."""

    def __init__(self, channel_id=5, user_id=42):
        self.channel_id = channel_id
        self.user = SimpleNamespace(id=user_id, name=f"user{user_id}")
        self.deferred: Optional[dict] = None
        self.responses: List[dict] = []
        self.followups: List[dict] = []
        self.original_edits: List[dict] = []
        self.response = SimpleNamespace(defer=self._defer, send_message=self._send_message)
        self.followup = SimpleNamespace(send=self._followup_send)

    async def _defer(self, **kwargs):
        self.deferred = kwargs

    async def _send_message(self, content=None, **kwargs):
        self.responses.append(dict(kwargs, content=content))

    async def _followup_send(self, content=None, **kwargs):
        self.followups.append(dict(kwargs, content=content))

    async def edit_original_response(self, **kwargs):
        self.original_edits.append(kwargs)


@pytest.fixture
def interaction():
    return FakeInteraction()


@pytest.fixture
def bot(config, service, registration, state, chat):
    return SimpleNamespace(
        config=config,
        leaderboard_service=service,
        registration_service=registration,
        scoreboard_state=state,
        chat=chat,
        rate_limiter=SimpleRateLimiter(),
    )


@pytest.fixture
def cog(bot):
    return LeaderboardCog(bot)


@pytest.fixture
def make_interaction():
    return FakeInteraction
