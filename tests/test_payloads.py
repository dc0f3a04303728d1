import pytest

from hashbench.service.payloads import DEFAULT_PAYLOADS, DEFAULT_RANDOM_SIZE, RANDOM_LABEL, build_payloads


def test_default_payloads_are_ordered_by_size():
    payloads = build_payloads()
    assert list(payloads) == ["small", "medium", "large"]
    assert [p.size for p in payloads.values()] == [13, 1000, 10000]
    assert payloads["small"].data == b"Hello, World!"


def test_default_payloads_are_deterministic():
    assert build_payloads() == build_payloads()


def test_seeded_random_payloads_are_reproducible():
    first = build_payloads(random_payloads=True, random_size=64, seed=7)
    second = build_payloads(random_payloads=True, random_size=64, seed=7)
    assert first == second
    assert first["small"].data != DEFAULT_PAYLOADS["small"]


def test_random_payloads_keep_size_classes():
    payloads = build_payloads(random_payloads=True, seed=1)
    assert list(payloads) == ["small", "medium", "large", RANDOM_LABEL]
    assert [p.size for p in payloads.values()] == [13, 1000, 10000, DEFAULT_RANDOM_SIZE]
    assert len({payloads[label].size for label in DEFAULT_PAYLOADS}) == 3


def test_unseeded_random_payloads_use_requested_extra_size():
    payloads = build_payloads(random_payloads=True, random_size=128)
    assert payloads["medium"].size == 1000
    assert payloads[RANDOM_LABEL].size == 128


def test_random_size_must_be_positive():
    with pytest.raises(ValueError):
        build_payloads(random_payloads=True, random_size=0)


def test_variant_appends_index_without_mutating(small_payload):
    assert small_payload.variant(0) == b"Hello, World!0"
    assert small_payload.variant(42) == b"Hello, World!42"
    assert small_payload.data == b"Hello, World!"


def test_payload_is_immutable(small_payload):
    with pytest.raises(AttributeError):
        small_payload.data = b"changed"
