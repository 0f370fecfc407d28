import pytest


class ConstantRandom:
    """Every die lands on the same value; ``sample`` keeps the first k."""

    def __init__(self, value: int):
        self.value = value

    def randint(self, a, b):
        return self.value

    def sample(self, population, k):
        return list(population)[:k]


class SequenceRandom(ConstantRandom):
    """Dice land on the given values in order, cycling when exhausted."""

    def __init__(self, values):
        super().__init__(values[0])
        self.values = list(values)
        self.calls = 0

    def randint(self, a, b):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def fours():
    return ConstantRandom(4)


@pytest.fixture
def sequence_rng():
    return SequenceRandom
