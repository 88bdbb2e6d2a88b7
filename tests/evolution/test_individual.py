"""
Unit tests for the individual contract and gene schema
"""

import sys
from pathlib import Path

import numpy as np
import pytest

project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from genevo.exceptions import ConfigurationError, ModelContractError
from genevo.evolution.components.individual import (
    GeneField,
    GeneKind,
    GeneSchema,
    get_gene,
    resolve_schema,
    set_gene,
)
from genevo.evolution.components.options import EvolutionOptions
from genevo.evolution.components.strategies.initialization import RandomInitialization

from demo_models import (
    ActivateBitModel,
    FindSecretSentenceModel,
    NoSchemaModel,
    PointModel,
    UnsupportedGeneModel,
)


class TestGeneSchema:
    """Test cases for GeneSchema resolution"""

    def test_array_length_from_collection_types_sizes(self):
        schema = resolve_schema(ActivateBitModel, EvolutionOptions(collection_types_sizes=8))

        assert schema['bit'].length == 8
        assert schema['bit0'].kind is GeneKind.SCALAR

    def test_collection_size_takes_precedence(self):
        options = EvolutionOptions(collection_size=5, collection_types_sizes=8)
        assert resolve_schema(ActivateBitModel, options)['bit'].length == 5

    def test_field_length_takes_precedence(self):
        schema = GeneSchema(GeneField('values', int, kind=GeneKind.ARRAY, length=3))
        resolved = schema.resolve(EvolutionOptions(collection_size=10))
        assert resolved['values'].length == 3

    def test_missing_array_length(self):
        """測試陣列基因缺少長度"""
        with pytest.raises(ConfigurationError, match="bit"):
            resolve_schema(ActivateBitModel, EvolutionOptions())

    def test_default_int_bounds(self):
        schema = resolve_schema(FindSecretSentenceModel, EvolutionOptions(collection_size=4))
        assert (schema['sentence'].low, schema['sentence'].high) == (0, 100)

    def test_bounds_from_options(self):
        options = EvolutionOptions(collection_size=4, min_number_value=32, max_number_value=126)
        field = resolve_schema(FindSecretSentenceModel, options)['sentence']

        assert (field.low, field.high) == (32, 126)

    def test_field_bounds_take_precedence(self):
        options = EvolutionOptions(min_number_value=0, max_number_value=1)
        field = resolve_schema(PointModel, options)['x']

        assert (field.low, field.high) == (-5.0, 5.0)

    def test_field_bounds_inverted(self):
        schema = GeneSchema(GeneField('x', float, low=2.0))
        with pytest.raises(ConfigurationError):
            schema.resolve(EvolutionOptions(max_number_value=1.0))

    def test_fractional_int_bounds_round_inward(self):
        options = EvolutionOptions(collection_size=34, min_number_value=32.5, max_number_value=33.9)
        field = resolve_schema(FindSecretSentenceModel, options)['sentence']

        assert (field.low, field.high) == (33, 33)
        assert isinstance(field.low, int)

    def test_seeded_int_genes_stay_within_fractional_bounds(self):
        options = EvolutionOptions(population_size=200, collection_size=34,
                                   min_number_value=32.5, max_number_value=35.9)
        population = RandomInitialization().initialize(
            FindSecretSentenceModel, options, np.random.default_rng(0)
        )

        values = np.concatenate([ind.sentence for ind in population])
        assert values.min() >= 32.5
        assert values.max() <= 35.9

    def test_no_integer_within_bounds(self):
        options = EvolutionOptions(collection_size=4, min_number_value=32.2, max_number_value=32.8)
        with pytest.raises(ConfigurationError, match="sentence"):
            resolve_schema(FindSecretSentenceModel, options)

    def test_unsupported_dtype(self):
        with pytest.raises(ModelContractError, match="label"):
            resolve_schema(UnsupportedGeneModel, EvolutionOptions())

    def test_missing_schema(self):
        with pytest.raises(ModelContractError, match="gene_schema"):
            resolve_schema(NoSchemaModel, EvolutionOptions())

    def test_not_an_individual(self):
        with pytest.raises(ModelContractError):
            resolve_schema(dict, EvolutionOptions())

    def test_duplicate_names(self):
        with pytest.raises(ModelContractError):
            GeneSchema(GeneField('x', int), GeneField('x', float))


class TestGeneAccess:
    """Test cases for get_gene / set_gene"""

    def setup_method(self):
        self.schema = resolve_schema(ActivateBitModel, EvolutionOptions(collection_types_sizes=4))

    def test_set_array_gene_converts_dtype(self):
        individual = ActivateBitModel()
        set_gene(individual, self.schema['bit'], [1, 0, 1, 0])

        assert individual.bit.dtype == np.bool_
        assert individual.bit.tolist() == [True, False, True, False]

    def test_set_array_gene_wrong_length(self):
        with pytest.raises(ModelContractError, match="長度"):
            set_gene(ActivateBitModel(), self.schema['bit'], [True, False])

    def test_get_missing_gene(self):
        """測試尚未設定的基因屬性"""
        with pytest.raises(ModelContractError, match="bit0"):
            get_gene(ActivateBitModel(), self.schema['bit0'])

    def test_get_gene_wrong_length(self):
        individual = ActivateBitModel()
        individual.bit = np.zeros(7, dtype=bool)
        with pytest.raises(ModelContractError):
            get_gene(individual, self.schema['bit'])


class TestEvolutionaryIndividual:
    """Test cases for the EvolutionaryIndividual base class"""

    def _make_bits(self):
        individual = ActivateBitModel()
        individual.bit0 = True
        individual.bit1 = False
        individual.bit = np.array([True, True, False, False])
        return individual

    def test_zero_argument_construction(self):
        individual = ActivateBitModel()
        assert individual.fitness == 0.0

    def test_accumulating_fitness(self):
        """累加式適應度每次呼叫都會增加，引擎必須只呼叫一次"""
        individual = self._make_bits()
        individual.calculate_fitness()
        assert individual.fitness == 30

        individual.calculate_fitness()
        assert individual.fitness == 60

    def test_clone_resets_fitness_and_copies_genes(self):
        individual = self._make_bits()
        individual.calculate_fitness()

        cloned = individual.clone()

        assert cloned is not individual
        assert cloned.fitness == 0.0
        assert cloned.bit0 is True
        assert np.array_equal(cloned.bit, individual.bit)
        assert not np.shares_memory(cloned.bit, individual.bit)

    def test_genes(self):
        individual = self._make_bits()
        genes = individual.genes()

        assert list(genes) == ['bit0', 'bit1', 'bit']
        genes['bit'][0] = False
        assert individual.bit[0]

    def test_repr(self):
        individual = self._make_bits()
        assert 'ActivateBitModel' in repr(individual)
        assert 'bit0=True' in repr(individual)
