"""Tests for the seeded random source."""

import math

import pytest

from mindentity.engine.rng import (
    DeterministicSource,
    _SineStream,
    generate_seed,
    hash_string,
    seed_from_string,
)
from mindentity.errors import RandomnessError


def test_hash_string_rolling_31():
    assert hash_string("") == 0
    assert hash_string("a") == 97
    assert hash_string("abc") == 96354


def test_hash_string_wraps_to_32_bits():
    value = hash_string("a much longer seed string that overflows")
    assert 0 <= value <= 2**31


def test_seed_from_string_base36():
    assert seed_from_string("abc") == "22ci"


def test_generate_seed_format():
    seed = generate_seed()
    assert seed.startswith("0x")
    assert len(seed) == 66
    int(seed, 16)


def test_same_seed_same_stream():
    a = DeterministicSource("abc")
    b = DeterministicSource("abc")
    assert [a.value() for _ in range(100)] == [b.value() for _ in range(100)]


def test_different_seeds_differ():
    a = DeterministicSource("abc")
    b = DeterministicSource("abd")
    assert [a.value() for _ in range(10)] != [b.value() for _ in range(10)]


def test_numeric_seed():
    a = DeterministicSource(42)
    b = DeterministicSource(42)
    assert a.value() == b.value()


def test_noise_table_consumes_255_draws():
    stream = _SineStream(hash_string("abc"))
    for _ in range(255):
        stream()
    source = DeterministicSource("abc")
    assert source.value() == stream()


def test_set_seed_resets_everything():
    source = DeterministicSource("abc")
    first = [source.value() for _ in range(5)]
    source.gaussian()
    source.set_seed("abc")
    assert source.seed == "abc"
    assert [source.value() for _ in range(5)] == first


def test_set_seed_clears_cached_gaussian():
    a = DeterministicSource("abc")
    a.gaussian()
    a.set_seed("xyz")
    b = DeterministicSource("xyz")
    assert a.gaussian() == b.gaussian()


def test_value_range():
    source = DeterministicSource("range")
    for _ in range(10_000):
        v = source.value()
        assert 0 <= v < 1


def test_value_non_zero():
    source = DeterministicSource("nz")
    for _ in range(1000):
        assert source.value_non_zero() != 0


def test_range_and_range_floor():
    source = DeterministicSource("r")
    for _ in range(1000):
        v = source.range(5, 10)
        assert 5 <= v < 10
        n = source.range_floor(3)
        assert n in (0, 1, 2)


def test_pick():
    source = DeterministicSource("p")
    items = ["a", "b", "c"]
    for _ in range(100):
        assert source.pick(items) in items


def test_pick_empty_returns_none_without_draw():
    a = DeterministicSource("p")
    b = DeterministicSource("p")
    assert a.pick([]) is None
    assert a.value() == b.value()


def test_shuffle_is_permutation():
    source = DeterministicSource("s")
    seq = list(range(50)) + [3, 3, 7]
    shuffled = source.shuffle(seq)
    assert sorted(shuffled) == sorted(seq)
    assert shuffled != seq


def test_shuffle_does_not_mutate():
    source = DeterministicSource("s")
    seq = (1, 2, 3, 4, 5)
    source.shuffle(seq)
    assert seq == (1, 2, 3, 4, 5)


def test_shuffle_deterministic():
    assert DeterministicSource("s").shuffle(range(20)) == DeterministicSource("s").shuffle(range(20))


def test_weighted_respects_zero_weights():
    source = DeterministicSource("w")
    for _ in range(200):
        assert source.weighted([0, 1, 0]) == 1


@pytest.mark.parametrize("weights", [[], [0, 0], [-1, 0.5], [-1, 2]])
def test_weighted_rejects_empty_zero_and_negative_weights(weights):
    with pytest.raises(RandomnessError):
        DeterministicSource("w").weighted(weights)


def test_weighted_set():
    source = DeterministicSource("w")
    assert source.weighted_set([]) is None
    assert source.weighted_set([("only", 1)]) == "only"


def test_weighted_set_distribution():
    source = DeterministicSource("dist")
    picks = [source.weighted_set([("solid", 80), ("gradient", 20)]) for _ in range(5000)]
    share = picks.count("solid") / len(picks)
    assert 0.75 < share < 0.85


def test_gaussian_caches_pair():
    a = DeterministicSource("g")
    b = DeterministicSource("g")
    a.gaussian()
    a.gaussian()
    b.gaussian()
    # The second call is served from the cache and consumes no draws.
    assert a.value() == b.value()


def test_gaussian_moments():
    source = DeterministicSource("moments")
    samples = [source.gaussian(10, 2) for _ in range(4000)]
    mean = sum(samples) / len(samples)
    var = sum((s - mean) ** 2 for s in samples) / len(samples)
    assert abs(mean - 10) < 0.2
    assert abs(math.sqrt(var) - 2) < 0.2


def test_circle_samples():
    source = DeterministicSource("c")
    x, y = source.on_circle(3)
    assert math.hypot(x, y) == pytest.approx(3)
    for _ in range(100):
        x, y = source.inside_circle(2)
        assert math.hypot(x, y) <= 2 + 1e-9


def test_boolean_and_sign():
    source = DeterministicSource("b")
    assert {source.sign() for _ in range(100)} == {-1, 1}
    assert {source.boolean() for _ in range(100)} == {True, False}


def test_noise_deterministic_and_bounded():
    a = DeterministicSource("n")
    b = DeterministicSource("n")
    for i in range(100):
        x = i * 0.37
        assert a.noise_2d(x, x * 0.5) == b.noise_2d(x, x * 0.5)
        assert -1.01 <= a.noise_1d(x) <= 1.01


def test_noise_depends_on_seed():
    a = DeterministicSource("n1")
    b = DeterministicSource("n2")
    xs = [i * 0.37 for i in range(1, 30)]
    assert [a.noise_2d(x, x) for x in xs] != [b.noise_2d(x, x) for x in xs]


def test_noise_higher_dimensions():
    source = DeterministicSource("n")
    assert source.noise_3d(0.3, 0.2, 0.1) == source.noise_3d(0.3, 0.2, 0.1)
    assert source.noise_4d(0.3, 0.2, 0.1, 0.5, amplitude=2) == source.noise_4d(0.3, 0.2, 0.1, 0.5, amplitude=2)


def test_permute_noise_changes_field():
    source = DeterministicSource("n")
    before = [source.noise_2d(i * 0.41, i * 0.13) for i in range(1, 30)]
    source.permute_noise()
    after = [source.noise_2d(i * 0.41, i * 0.13) for i in range(1, 30)]
    assert before != after


def test_unseeded_source_still_in_range():
    source = DeterministicSource()
    assert source.seed is None
    assert 0 <= source.value() < 1
