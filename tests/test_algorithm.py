"""Tests for the GeneticAlgorithm generation lifecycle."""

import math
import random
from collections import Counter

import pytest

from marble_ga.algorithm import GeneticAlgorithm
from marble_ga.config.algorithm import GeneticAlgorithmConfig
from marble_ga.exceptions import ConfigurationError, LifecycleError, SelectionError
from marble_ga.genetics import Genome
from marble_ga.individual import MarbleIndividual
from tests.fakes.fake_simulation import FakeSimulation

PARENT_GENOMES = [(5.0, 0.0), (10.0, 0.5), (0.0, 1.0), (25.0, 3.14)]
PARENT_DISTANCES = {genes: distance for genes, distance in zip(PARENT_GENOMES, [1.0, 2.0, 4.0, 10.0])}


def make_config(**overrides):
    values = dict(
        population_size=4,
        father_gene_probability={"power": 0.5, "angle": 0.5},
        mutation_probability=0.0,
    )
    values.update(overrides)
    return GeneticAlgorithmConfig(**values)


def make_population(simulation, launch_site, goal, genomes):
    return [
        MarbleIndividual(simulation, launch_site, goal, genome=Genome(power, angle))
        for power, angle in genomes
    ]


def run_generation(algorithm, simulation):
    algorithm.start_iteration()
    while not algorithm.all_stopped():
        simulation.step()
    return algorithm.stop_iteration()


@pytest.fixture
def scripted_simulation():
    return FakeSimulation(distance_fn=lambda power, angle: PARENT_DISTANCES.get((power, angle), 50.0))


class TestInitialize:
    def test_resets_counter(self, fake_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config(), rng=random.Random(1))
        algorithm.initialize(make_population(fake_simulation, launch_site, goal, PARENT_GENOMES))
        assert algorithm.iteration_count == 0
        assert len(algorithm.population) == 4

    def test_only_once(self, fake_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config())
        algorithm.initialize([])
        with pytest.raises(LifecycleError):
            algorithm.initialize([])

    @pytest.mark.parametrize(
        "call",
        [
            lambda a: a.start_iteration(),
            lambda a: a.all_stopped(),
            lambda a: a.stop_iteration(),
            lambda a: a.kill_all(),
        ],
    )
    def test_required_before_other_operations(self, call):
        algorithm = GeneticAlgorithm(make_config())
        with pytest.raises(LifecycleError):
            call(algorithm)

    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigurationError):
            GeneticAlgorithm(make_config(mutation_probability=1.5))


class TestIteration:
    def test_start_increments_and_launches(self, fake_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config())
        algorithm.initialize(make_population(fake_simulation, launch_site, goal, PARENT_GENOMES))

        algorithm.start_iteration()

        assert algorithm.iteration_count == 1
        assert algorithm.is_running is True
        launches = [agent.launches for agent in fake_simulation.spawned]
        assert launches == [[genes] for genes in PARENT_GENOMES]

    def test_cannot_start_twice(self, fake_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config())
        algorithm.initialize(make_population(fake_simulation, launch_site, goal, PARENT_GENOMES))
        algorithm.start_iteration()
        with pytest.raises(LifecycleError):
            algorithm.start_iteration()

    def test_cannot_stop_before_start(self, fake_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config())
        algorithm.initialize(make_population(fake_simulation, launch_site, goal, PARENT_GENOMES))
        with pytest.raises(LifecycleError):
            algorithm.stop_iteration()

    def test_cannot_stop_while_moving(self, launch_site, goal):
        simulation = FakeSimulation(ticks_to_settle=100)
        algorithm = GeneticAlgorithm(make_config())
        population = make_population(simulation, launch_site, goal, PARENT_GENOMES)
        algorithm.initialize(population)
        algorithm.start_iteration()

        with pytest.raises(LifecycleError):
            algorithm.stop_iteration()

        assert algorithm.is_running is True
        assert algorithm.iteration_count == 1
        assert list(algorithm.population) == population
        assert not any(agent.stopped for agent in simulation.spawned)

    def test_all_stopped_tracks_motion(self, launch_site, goal):
        simulation = FakeSimulation(ticks_to_settle=2)
        algorithm = GeneticAlgorithm(make_config())
        population = make_population(simulation, launch_site, goal, PARENT_GENOMES)
        algorithm.initialize(population)

        assert algorithm.all_stopped() is True
        algorithm.start_iteration()
        assert algorithm.all_stopped() is False

        # One straggler keeps the generation in flight
        simulation.spawned[2].remaining_ticks = 5
        simulation.step()
        simulation.step()
        assert algorithm.all_stopped() is False
        for _ in range(3):
            simulation.step()
        assert algorithm.all_stopped() is True

    def test_empty_population_is_stopped(self):
        algorithm = GeneticAlgorithm(make_config())
        algorithm.initialize([])
        assert algorithm.all_stopped() is True

    def test_empty_population_cannot_advance(self):
        algorithm = GeneticAlgorithm(make_config())
        algorithm.initialize([])
        algorithm.start_iteration()
        with pytest.raises(SelectionError):
            algorithm.stop_iteration()

    def test_counter_monotonic(self, scripted_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config(), rng=random.Random(2))
        algorithm.initialize(make_population(scripted_simulation, launch_site, goal, PARENT_GENOMES))
        generations = [run_generation(algorithm, scripted_simulation).generation for _ in range(4)]
        assert generations == [1, 2, 3, 4]
        assert algorithm.iteration_count == 4


class TestGenerationAdvancement:
    def test_replaces_population(self, scripted_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config(), rng=random.Random(3))
        old = make_population(scripted_simulation, launch_site, goal, PARENT_GENOMES)
        algorithm.initialize(old)

        run_generation(algorithm, scripted_simulation)

        new = algorithm.population
        assert len(new) == 4
        assert not set(map(id, old)) & set(map(id, new))
        assert all(individual.destroyed for individual in old)
        assert len(scripted_simulation.live) == 4
        assert algorithm.is_running is False

    def test_stops_every_individual_first(self, scripted_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config(), rng=random.Random(3))
        algorithm.initialize(make_population(scripted_simulation, launch_site, goal, PARENT_GENOMES))
        run_generation(algorithm, scripted_simulation)
        assert all(agent.stopped for agent in scripted_simulation.spawned[:4])

    def test_report(self, scripted_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config(), rng=random.Random(4))
        algorithm.initialize(make_population(scripted_simulation, launch_site, goal, PARENT_GENOMES))

        report = run_generation(algorithm, scripted_simulation)

        assert report.generation == 1
        assert report.fitness_values == pytest.approx((1.0, 0.25, 0.0625, 0.01))
        assert report.best_fitness == pytest.approx(1.0)
        assert report.best_genome == {"power": 5.0, "angle": 0.0}
        assert report.closest_distance == pytest.approx(1.0)
        assert report.mean_fitness == pytest.approx(1.3225 / 4)
        assert report.reached_goal is True
        assert report.to_dict()["generation"] == 1

    def test_children_only_carry_parent_genes(self, scripted_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config(), rng=random.Random(5))
        algorithm.initialize(make_population(scripted_simulation, launch_site, goal, PARENT_GENOMES))

        run_generation(algorithm, scripted_simulation)

        powers = {power for power, _ in PARENT_GENOMES}
        angles = {angle for _, angle in PARENT_GENOMES}
        for child in algorithm.population:
            assert child.genome.power in powers
            assert child.genome.angle in angles

    def test_fitter_parents_selected_more_often(self, launch_site, goal):
        """The marble resting at distance 1 out-breeds the one at distance 10."""
        counts = Counter()
        config = make_config(father_gene_probability={"power": 1.0, "angle": 1.0})
        for trial in range(50):
            simulation = FakeSimulation(
                distance_fn=lambda power, angle: PARENT_DISTANCES.get((power, angle), 50.0)
            )
            algorithm = GeneticAlgorithm(config, rng=random.Random(trial))
            algorithm.initialize(make_population(simulation, launch_site, goal, PARENT_GENOMES))
            run_generation(algorithm, simulation)
            counts.update((c.genome.power, c.genome.angle) for c in algorithm.population)

        assert counts[(5.0, 0.0)] > counts[(25.0, 3.14)]
        assert counts[(5.0, 0.0)] > 100

    def test_mutation_keeps_bounds(self, launch_site, goal):
        simulation = FakeSimulation()
        config = make_config(
            population_size=10,
            mutation_probability=1.0,
            gene_mutation_probability={"power": 1.0, "angle": 1.0},
            gene_mutation_range={"power": 100.0, "angle": 100.0},
        )
        algorithm = GeneticAlgorithm(config, rng=random.Random(6))
        algorithm.initialize(
            MarbleIndividual(simulation, launch_site, goal, rng=random.Random(i)) for i in range(10)
        )
        for _ in range(5):
            run_generation(algorithm, simulation)
            for individual in algorithm.population:
                assert 0.0 <= individual.genome.power <= 25.0
                assert 0.0 <= individual.genome.angle <= math.pi

    def test_seeded_runs_are_reproducible(self, launch_site, goal):
        def evolve(seed):
            simulation = FakeSimulation(distance_fn=lambda power, angle: 1.0 + power + angle)
            algorithm = GeneticAlgorithm(make_config(mutation_probability=0.5), rng=random.Random(seed))
            algorithm.initialize(make_population(simulation, launch_site, goal, PARENT_GENOMES))
            for _ in range(3):
                run_generation(algorithm, simulation)
            return [individual.genome.to_dict() for individual in algorithm.population]

        assert evolve(8) == evolve(8)


class TestKillAll:
    def test_destroys_and_empties(self, fake_simulation, launch_site, goal):
        algorithm = GeneticAlgorithm(make_config())
        population = make_population(fake_simulation, launch_site, goal, PARENT_GENOMES)
        algorithm.initialize(population)
        algorithm.start_iteration()

        algorithm.kill_all()

        assert algorithm.population == ()
        assert algorithm.is_running is False
        assert all(individual.destroyed for individual in population)
        assert fake_simulation.live == []
        assert algorithm.all_stopped() is True
