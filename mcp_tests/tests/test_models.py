import pytest

from core.errors import ValidationError
from core.models import CacheConfig, EvictionPolicy, PutResult


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("OldestFirst", EvictionPolicy.OLDEST_FIRST),
        ("evict-oldest", EvictionPolicy.OLDEST_FIRST),
        ("NEWEST_FIRST", EvictionPolicy.NEWEST_FIRST),
        ("newest", EvictionPolicy.NEWEST_FIRST),
        (" reject ", EvictionPolicy.REJECT),
        (EvictionPolicy.REJECT, EvictionPolicy.REJECT),
    ],
)
def test_policy_parse(raw, expected):
    assert EvictionPolicy.parse(raw) is expected


def test_policy_parse_unknown():
    with pytest.raises(ValidationError):
        EvictionPolicy.parse("lru")


def test_config_defaults():
    cfg = CacheConfig(host="localhost", port=6379)
    assert cfg.capacity == 10_000
    assert cfg.default_ttl_seconds == 3600
    assert cfg.policy is EvictionPolicy.REJECT
    assert cfg.queue_name == "trackKeyList"
    assert cfg.repair_batch_size == 1000


def test_config_normalizes_policy_string():
    cfg = CacheConfig(host="h", port=1, policy="oldest")
    assert cfg.policy is EvictionPolicy.OLDEST_FIRST
    assert cfg.to_dict()["policy"] == "OldestFirst"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"host": " ", "port": 6379},
        {"host": "h", "port": 0},
        {"host": "h", "port": 6379, "capacity": 0},
        {"host": "h", "port": 6379, "default_ttl_seconds": 0},
        {"host": "h", "port": 6379, "repair_batch_size": 0},
        {"host": "h", "port": 6379, "queue_name": ""},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(ValidationError):
        CacheConfig(**kwargs)


def test_config_is_immutable():
    cfg = CacheConfig(host="h", port=1)
    with pytest.raises(Exception):
        cfg.capacity = 5


def test_put_result_to_dict():
    assert PutResult(key="k", value=[1]).to_dict() == {"key": "k", "value": [1]}
