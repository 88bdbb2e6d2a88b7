import unittest
from unittest.mock import MagicMock

import numpy as np

from genevo.evolution.components.generation import Population
from genevo.evolution.components.options import EvolutionOptions
from genevo.evolution.components.strategies.selection import EliteSelection, ProportionalSelection

from demo_models import PointModel, with_fitness


def make_scored_population(values):
    return Population(with_fitness([PointModel() for _ in values], values))


class TestEliteSelection(unittest.TestCase):

    def setUp(self):
        self.values = [3, 9, 1, 9, 5, 0]
        self.population = make_scored_population(self.values)
        self.options = EvolutionOptions(population_size=6, natural_selection_rate=0.5)
        self.rng = np.random.default_rng(0)

    def test_select_top_with_stable_ties(self):
        strategy = EliteSelection()
        survivors = strategy.select(self.population, self.options, self.rng)

        self.assertEqual(len(survivors), 3)
        # 平手時保持原族群順序
        self.assertIs(survivors[0], self.population[1])
        self.assertIs(survivors[1], self.population[3])
        self.assertIs(survivors[2], self.population[4])

    def test_survivors_dominate_the_rest(self):
        rng = np.random.default_rng(7)
        values = rng.integers(0, 20, size=40).tolist()
        population = make_scored_population(values)
        options = EvolutionOptions(population_size=40, natural_selection_rate=0.25)

        survivors = EliteSelection().select(population, options, rng)
        rejected = [ind for ind in population if all(ind is not s for s in survivors)]

        self.assertEqual(len(survivors), 10)
        self.assertGreaterEqual(min(s.fitness for s in survivors), max(r.fitness for r in rejected))

    def test_input_population_is_untouched(self):
        before = self.population.to_list()
        EliteSelection().select(self.population, self.options, self.rng)

        self.assertEqual(self.population.to_list(), before)
        self.assertEqual([ind.fitness for ind in self.population], self.values)

    def test_at_least_one_survivor(self):
        options = EvolutionOptions(population_size=6, natural_selection_rate=0.01)
        survivors = EliteSelection().select(self.population, options, self.rng)

        self.assertEqual(len(survivors), 1)
        self.assertIs(survivors[0], self.population[1])

    def test_engine_reference(self):
        strategy = EliteSelection()
        engine = MagicMock()
        strategy.set_engine(engine)
        self.assertIs(strategy.engine, engine)


class TestProportionalSelection(unittest.TestCase):

    def setUp(self):
        self.options = EvolutionOptions(
            population_size=10,
            natural_selection_type='proportional',
            natural_selection_rate=0.5,
        )

    def test_survivor_count(self):
        population = make_scored_population(range(10))
        survivors = ProportionalSelection().select(population, self.options, np.random.default_rng(1))

        self.assertEqual(len(survivors), 5)
        for survivor in survivors:
            self.assertIn(survivor, population.to_list())

    def test_zero_fitness_is_never_drawn_when_mass_exists(self):
        values = [0, 0, 0, 4, 0, 0, 0, 0, 0, 0]
        population = make_scored_population(values)
        survivors = ProportionalSelection().select(population, self.options, np.random.default_rng(2))

        # 可重複抽中同一個體
        self.assertTrue(all(s is population[3] for s in survivors))

    def test_all_zero_fitness_falls_back_to_uniform(self):
        population = make_scored_population([0] * 10)
        with self.assertLogs('genevo.evolution.components.strategies.selection', level='WARNING'):
            survivors = ProportionalSelection().select(population, self.options, np.random.default_rng(3))

        self.assertEqual(len(survivors), 5)

    def test_probability_follows_fitness(self):
        population = make_scored_population([1, 3])
        options = EvolutionOptions(population_size=4000, natural_selection_rate=1.0)
        survivors = ProportionalSelection().select(population, options, np.random.default_rng(4))

        share = sum(1 for s in survivors if s is population[1]) / len(survivors)
        self.assertAlmostEqual(share, 0.75, delta=0.05)

    def test_same_seed_same_survivors(self):
        population = make_scored_population(range(1, 11))
        first = ProportionalSelection().select(population, self.options, np.random.default_rng(42))
        second = ProportionalSelection().select(population, self.options, np.random.default_rng(42))

        self.assertEqual(first.to_list(), second.to_list())


if __name__ == '__main__':
    unittest.main()
