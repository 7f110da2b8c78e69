import pytest

import engine.cache_engine as engine_mod
from core.errors import ValidationError
from core.models import EvictionPolicy
from engine.cache_engine import CacheEngine
from tools import configure_cache as configure_tool


class RecordingEngine:
    def __init__(self):
        self.configs = []

    async def configure(self, config, *, store=None):
        self.configs.append(config)


@pytest.mark.asyncio
async def test_configure_cache_builds_config(dummy_mcp):
    engine = RecordingEngine()
    configure_tool.register(dummy_mcp, engine=engine)
    fn = dummy_mcp.tools["configure_cache"]

    out = await fn(host="redis", port=6380, capacity=50, ttl_seconds=120, policy="OldestFirst")

    cfg = engine.configs[0]
    assert cfg.host == "redis" and cfg.port == 6380
    assert cfg.capacity == 50
    assert cfg.default_ttl_seconds == 120
    assert cfg.policy is EvictionPolicy.OLDEST_FIRST
    assert out["policy"] == "OldestFirst"
    assert out["capacity"] == 50


@pytest.mark.asyncio
async def test_configure_cache_zero_ttl_disables_expiry(dummy_mcp):
    engine = RecordingEngine()
    configure_tool.register(dummy_mcp, engine=engine)

    await dummy_mcp.tools["configure_cache"](host="redis", port=6379, ttl_seconds=0)

    assert engine.configs[0].default_ttl_seconds is None
    assert engine.configs[0].policy is EvictionPolicy.REJECT


@pytest.mark.asyncio
async def test_configure_cache_rejects_bad_policy(dummy_mcp):
    engine = RecordingEngine()
    configure_tool.register(dummy_mcp, engine=engine)

    with pytest.raises(ValidationError):
        await dummy_mcp.tools["configure_cache"](host="redis", port=6379, policy="random")
    assert engine.configs == []


@pytest.mark.asyncio
async def test_configure_cache_replaces_engine_store(monkeypatch, dummy_mcp, fake_store):
    engine = CacheEngine()
    replacement = type(fake_store)()

    monkeypatch.setattr(engine_mod, "get_store", lambda config, store=None: replacement)
    configure_tool.register(dummy_mcp, engine=engine)

    await dummy_mcp.tools["configure_cache"](host="redis", port=6379, capacity=3)
    await engine.put("k", "v")

    assert engine.config.capacity == 3
    assert "k" in replacement.values
