from .components import (
    EvolutionEngine,
    EvolutionaryIndividual,
    EvolutionOptions,
    EvolutionResult,
    Generation,
    GeneField,
    GeneKind,
    GeneSchema,
    MutationType,
    NaturalSelectionType,
    Population,
    create_evolution_engine,
    load_options,
)
from .early_stopping import EarlyStopping
