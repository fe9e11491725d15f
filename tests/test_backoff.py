import random
from datetime import timedelta

from mqtt5core.backoff import ExponentialBackoff


def ms(value):
    return timedelta(milliseconds=value)


def test_exponential_backoff():
    generator = ExponentialBackoff()

    first = generator.generate()
    assert ms(500) <= first <= ms(1500)

    second = generator.generate()
    assert ms(1500) <= second <= ms(2500)

    third = generator.generate()
    assert ms(3500) <= third <= ms(4500)

    fourth = generator.generate()
    assert ms(7500) <= fourth <= ms(8500)

    fifth = generator.generate()
    assert ms(15500) <= fifth <= ms(16500)

    sixth = generator.generate()
    assert ms(15500) <= sixth <= ms(16500)


def test_backoff_stays_capped():
    generator = ExponentialBackoff(rng=random.Random(7))
    delays = [generator.generate() for _ in range(20)]
    assert all(ms(15500) <= d <= ms(16500) for d in delays[4:])


def test_same_seed_gives_same_delays():
    first = ExponentialBackoff(rng=random.Random(42))
    second = ExponentialBackoff(rng=random.Random(42))
    assert [first.generate() for _ in range(6)] == [second.generate() for _ in range(6)]


def test_independent_generators_restart_from_one_second():
    generator = ExponentialBackoff()
    for _ in range(5):
        generator.generate()
    fresh = ExponentialBackoff()
    assert ms(500) <= fresh.generate() <= ms(1500)