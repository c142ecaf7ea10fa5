"""Genetic-algorithm search for slab layouts.

An individual assigns every piece, in input order, a gene
``(bin index, x, y, rotated)`` and carries the bins those genes realize.
Individuals are built by choosing uniformly among all valid placements for
each piece in turn, opening a new slab only when nothing fits.

Fitness, lower is better, is the free area of the used slabs plus a large
penalty per slab, so slab count dominates and waste breaks ties.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Sequence
from dataclasses import dataclass, replace

from countertops.contracts.protocols import FreeSpaceFinder, ProgressCallback
from countertops.domain.entities import Solution
from countertops.domain.exceptions import InfeasibleError, UnplaceablePieceError
from countertops.domain.services.free_space import (
    DEFAULT_MAX_SPACES,
    GridScanFreeSpaceFinder,
)
from countertops.domain.services.orientation import find_unplaceable
from countertops.domain.value_objects import Algorithm, Piece
from countertops.infrastructure.layout_state import (
    BinState,
    Move,
    apply_move,
    existing_bin_moves,
    new_bin_moves,
    orientations,
    to_slabs,
)

logger = logging.getLogger(__name__)

BIN_PENALTY = 1_000_000.0


@dataclass(frozen=True)
class Gene:
    """Where one piece goes in an individual."""

    bin_index: int
    x: float
    y: float
    rotated: bool


@dataclass(frozen=True)
class Individual:
    """A complete candidate layout."""

    genes: tuple[Gene, ...]
    bins: tuple[BinState, ...]
    fitness: float

    @property
    def slab_count(self) -> int:
        return sum(1 for state in self.bins if state.placements)


@dataclass(frozen=True)
class GenerationProgress:
    """Snapshot reported every ``progress_interval`` generations."""

    generation: int
    best_fitness: float
    best_slab_count: int


@dataclass(frozen=True)
class _Problem:
    pieces: tuple[Piece, ...]
    variants: tuple[tuple[Piece, ...], ...]
    slab_width: float
    slab_height: float


class GeneticSolver:
    """Evolves a population of layouts toward fewer slabs and less waste.

    Attributes:
        max_slabs: Slab count a layout may use before it is infeasible.
        population_size: Individuals per generation.
        generations: Number of generations to evolve.
        elite_count: Best individuals copied unchanged into each generation.
        mutation_rate: Probability that a child is mutated.
        progress_interval: Generations between progress reports.
        seed: Seed for the solver's random number generator.
        finder: Free-space discovery used after each placement.
    """

    def __init__(
        self,
        max_slabs: int = 10,
        population_size: int = 30,
        generations: int = 40,
        elite_count: int = 4,
        mutation_rate: float = 0.1,
        progress_interval: int = 10,
        seed: int | None = None,
        finder: FreeSpaceFinder | None = None,
    ) -> None:
        if max_slabs < 1:
            raise ValueError("max_slabs must be at least 1")
        if population_size < 2:
            raise ValueError("population_size must be at least 2")
        if generations < 1:
            raise ValueError("generations must be at least 1")
        if not 1 <= elite_count < population_size:
            raise ValueError("elite_count must be between 1 and population_size - 1")
        if not 0.0 <= mutation_rate <= 1.0:
            raise ValueError("mutation_rate must be between 0 and 1")
        if progress_interval < 1:
            raise ValueError("progress_interval must be at least 1")
        self.max_slabs = max_slabs
        self.population_size = population_size
        self.generations = generations
        self.elite_count = elite_count
        self.mutation_rate = mutation_rate
        self.progress_interval = progress_interval
        self.seed = seed
        self.finder = finder or GridScanFreeSpaceFinder(DEFAULT_MAX_SPACES)

    def solve(
        self,
        pieces: Sequence[Piece],
        slab_width: float,
        slab_height: float,
        progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> Solution:
        """Evolve layouts and return the best individual of the last generation.

        Raises:
            UnplaceablePieceError: If a piece fits an empty slab in neither
                orientation.
            InfeasibleError: If the best individual needs more than max_slabs.
        """
        unplaceable = find_unplaceable(pieces, slab_width, slab_height)
        if unplaceable:
            raise UnplaceablePieceError(unplaceable)
        if not pieces:
            return Solution(
                slabs=(),
                slab_width=slab_width,
                slab_height=slab_height,
                algorithm=Algorithm.GENETIC,
            )

        rng = random.Random(self.seed)
        problem = _Problem(
            pieces=tuple(pieces),
            variants=tuple(tuple(orientations(p)) for p in pieces),
            slab_width=slab_width,
            slab_height=slab_height,
        )

        population = [self._random_individual(problem, rng) for _ in range(self.population_size)]
        # Parents are drawn from a pool wider than the elite.
        pool_size = max(2, self.elite_count * 2, self.population_size // 2)

        for generation in range(self.generations):
            population.sort(key=lambda ind: ind.fitness)
            best = population[0]
            if progress is not None and generation % self.progress_interval == 0:
                progress(GenerationProgress(generation, best.fitness, best.slab_count))
            logger.debug(
                "Generation %d: best fitness %.1f on %d slab(s)",
                generation,
                best.fitness,
                best.slab_count,
            )
            if cancel is not None and cancel.is_set():
                logger.warning("Genetic search cancelled at generation %d", generation)
                break

            pool = population[:pool_size]
            offspring = population[: self.elite_count]
            while len(offspring) < self.population_size:
                first, second = rng.sample(pool, 2)
                child = self._crossover(problem, first, second, rng)
                if rng.random() < self.mutation_rate:
                    child = self._mutate(problem, child, rng)
                offspring.append(child)
            population = offspring

        population.sort(key=lambda ind: ind.fitness)
        best = population[0]

        if best.slab_count > self.max_slabs:
            raise InfeasibleError(self.max_slabs, pieces=problem.pieces)

        logger.info(
            "Genetic search finished: %d slab(s), fitness %.1f", best.slab_count, best.fitness
        )
        return Solution(
            slabs=to_slabs(best.bins, slab_width, slab_height),
            slab_width=slab_width,
            slab_height=slab_height,
            algorithm=Algorithm.GENETIC,
        )

    def fitness(self, bins: Sequence[BinState], slab_width: float, slab_height: float) -> float:
        """Free area of used slabs plus BIN_PENALTY per used slab."""
        slab_area = slab_width * slab_height
        used = [state for state in bins if state.placements]
        return sum(slab_area - state.used_area for state in used) + len(used) * BIN_PENALTY

    def _random_move(
        self,
        problem: _Problem,
        bins: tuple[BinState, ...],
        index: int,
        rng: random.Random,
    ) -> Move:
        """Pick any valid placement for piece ``index``, or open a new bin."""
        moves = list(existing_bin_moves(bins, problem.variants[index]))
        if moves:
            return rng.choice(moves)
        if len(bins) >= self.max_slabs:
            logger.debug(
                "Piece '%s' overflows the %d slab cap",
                problem.pieces[index].label,
                self.max_slabs,
            )
        return rng.choice(
            new_bin_moves(bins, problem.variants[index], problem.slab_width, problem.slab_height)
        )

    def _build(
        self,
        problem: _Problem,
        suggested: Sequence[Gene | None],
        rng: random.Random,
    ) -> Individual:
        """Realize genes piece by piece, replacing any that no longer fit."""
        bins: tuple[BinState, ...] = ()
        genes: list[Gene] = []
        for index, gene in enumerate(suggested):
            move = self._replay(problem, bins, index, gene)
            if move is None:
                move = self._random_move(problem, bins, index, rng)
            bins = apply_move(bins, move, problem.slab_width, problem.slab_height, self.finder)
            genes.append(Gene(move.bin_index, move.x, move.y, move.piece.rotated))
        return Individual(
            genes=tuple(genes),
            bins=bins,
            fitness=self.fitness(bins, problem.slab_width, problem.slab_height),
        )

    def _replay(
        self,
        problem: _Problem,
        bins: tuple[BinState, ...],
        index: int,
        gene: Gene | None,
    ) -> Move | None:
        """Return the gene's placement as a move if it is still valid."""
        if gene is None:
            return None
        piece = problem.pieces[index].oriented(gene.rotated)
        if gene.bin_index < len(bins):
            target = bins[gene.bin_index]
        elif gene.bin_index == len(bins) and len(bins) < self.max_slabs:
            target = BinState.empty(problem.slab_width, problem.slab_height)
        else:
            return None
        if not target.accepts_at(piece, gene.x, gene.y, problem.slab_width, problem.slab_height):
            return None
        return Move(gene.bin_index, gene.x, gene.y, piece)

    def _random_individual(self, problem: _Problem, rng: random.Random) -> Individual:
        return self._build(problem, [None] * len(problem.pieces), rng)

    def _crossover(
        self,
        problem: _Problem,
        first: Individual,
        second: Individual,
        rng: random.Random,
    ) -> Individual:
        """Single-point crossover replayed against fresh bins."""
        count = len(problem.pieces)
        cut = rng.randint(1, count - 1) if count > 1 else count
        genes = first.genes[:cut] + second.genes[cut:]
        return self._build(problem, genes, rng)

    def _mutate(
        self, problem: _Problem, individual: Individual, rng: random.Random
    ) -> Individual:
        """Flip one gene's rotation, then rebuild the individual from scratch.

        The rebuild does not read the genes, so the flipped gene is not
        carried into the result; mutation effectively re-randomizes.
        """
        genes = list(individual.genes)
        index = rng.randrange(len(genes))
        genes[index] = replace(genes[index], rotated=not genes[index].rotated)
        return self._random_individual(problem, rng)
