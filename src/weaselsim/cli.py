import argparse
import logging
import sys
import time

import numpy as np
import yaml

from weaselsim.cancellation import InterruptToken
from weaselsim.color import fg
from weaselsim.config import build_config, load_config
from weaselsim.evolution.fitness import MatchFitness
from weaselsim.evolution.mutator import UniformMutator
from weaselsim.genome.sequence import Genome
from weaselsim.io.reporter_registry import ReporterRegistry
from weaselsim.population.container import Population
from weaselsim.simulator import Simulator

logger = logging.getLogger(__name__)


def run_simulation_from_config(conf, cancel_token=None, reporters=None, stream=None):
    """
    Runs the search based on a validated configuration dictionary.
    This function is reusable for both CLI and Streamlit UI.
    :param reporters: Extra reporters to attach besides the configured ones.
    :return: The RunResult of the search.
    """

    # 1. Initialize Core Components
    genome = Genome(filler=conf['population'].get('filler', 'A'))
    target = genome.encode(conf['target'])
    pop = Population.create_filled(conf['population']['size'], genome, len(target))

    seed = conf.get('seed')
    if seed is None:
        seed = time.time_ns()
    logger.info("Random seed: %d", seed)
    rng = np.random.default_rng(seed)

    mutator = UniformMutator(genome=genome, rate=conf['mutation']['probability'])
    fitness = MatchFitness(target)

    # 2. Setup Reporters
    all_reporters = ReporterRegistry.get_reporters(conf, stream=stream)
    if reporters:
        all_reporters.extend(reporters)

    # 3. Run
    sim = Simulator(
        population=pop,
        genome=genome,
        fitness_model=fitness,
        mutator=mutator,
        reporters=all_reporters,
        rng=rng,
        cancel_token=cancel_token,
        max_generations=conf.get('max_generations')
    )
    return sim.run()


def build_parser():
    parser = argparse.ArgumentParser(
        prog="weasel",
        description="WEASEL: evolve a string of 'A's into a target by mutation and selection"
    )
    parser.add_argument("target", nargs="?", help="Target string (letters A-Z and space)")
    parser.add_argument("probability", nargs="?", type=float,
                        help="Probability that each character mutates, in [0, 1]")
    parser.add_argument("population_size", nargs="?", type=int,
                        help="Number of candidate strings")
    parser.add_argument("--config", help="Path to a YAML configuration file")
    parser.add_argument("--seed", type=int, help="Seed for the random generator (default: clock)")
    parser.add_argument("--max-generations", type=int,
                        help="Stop after this many generations (default: run until matched)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    """
    CLI Entry point, e.g.
        weasel "METHINKS IT IS LIKE A WEASEL" 0.05 100
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # Load Configuration from file
    conf = {}
    if args.config:
        try:
            conf = load_config(args.config)
        except (OSError, yaml.YAMLError) as e:
            print(fg.RED, f"Error: Could not read config file. {e}", fg.RESET)
            return 1
        except ValueError as e:
            print(fg.RED, f"Error: {e}", fg.RESET)
            return 1

    try:
        conf = build_config(
            conf,
            target=args.target,
            probability=args.probability,
            population_size=args.population_size,
            seed=args.seed,
            max_generations=args.max_generations
        )
    except ValueError as e:
        print(fg.RED, f"Error: {e}", fg.RESET)
        return 1

    # Fix the seed here so the banner can show it
    if conf['seed'] is None:
        conf['seed'] = time.time_ns()

    # Run the common logic. Banners go to stderr, stdout holds only the report
    print(fg.GREEN, f"--- Starting Search (seed {conf['seed']}) ---", fg.RESET, file=sys.stderr)
    try:
        with InterruptToken() as token:
            result = run_simulation_from_config(conf, cancel_token=token)
    except ValueError as e:
        print(fg.RED, f"Error: {e}", fg.RESET)
        return 1

    if result.matched:
        print(fg.GREEN, "--- Done ---", fg.RESET, file=sys.stderr)
    else:
        print(fg.YELLOW, f"--- Stopped ({result.reason.value}) ---", fg.RESET, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
