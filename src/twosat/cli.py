"""
twosat CLI launcher for solving, benchmarking and generating 2-SAT instances
"""
import argparse
import json
import os
import sys

from twosat.benchmark import find_instance_files, run_benchmarks
from twosat.decision import cross_validate, solve
from twosat.solvers import SolverRegistry, load_config
from twosat.utils.cnf import load_instance, save_instance
from twosat.utils.exceptions import DecisionError
from twosat.utils.generators import generate_instance, generate_planted_instance
from twosat.utils.logging_utils import configure_logging, create_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twosat", description="2-SAT decision engines")
    parser.add_argument("--config", type=str, default=None, help="YAML or JSON config file")
    parser.add_argument("--debug", action="store_true")
    subparsers = parser.add_subparsers(dest="command")

    solve_parser = subparsers.add_parser("solve", help="Decide one instance file")
    solve_parser.add_argument("file")
    solve_parser.add_argument(
        "--engine",
        choices=SolverRegistry.list_solvers() + ["both"],
        default=None,
        help="Engine to run; 'both' cross-validates the two engines",
    )
    solve_parser.add_argument("--seed", type=int, default=None)
    solve_parser.add_argument("--runs", type=int, default=1, help="Randomized runs for 'both'")
    solve_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    bench_parser = subparsers.add_parser("benchmark", help="Decide many instance files")
    bench_parser.add_argument("paths", nargs="+", help="Files or directories")
    bench_parser.add_argument("--engine", action="append", default=None)
    bench_parser.add_argument("--seed", type=int, default=None)
    bench_parser.add_argument("--out-dir", default=None)
    bench_parser.add_argument("--format", choices=["json", "csv"], default=None)
    bench_parser.add_argument("--name", default="benchmark")

    gen_parser = subparsers.add_parser("generate", help="Write a random instance")
    gen_parser.add_argument("--vars", type=int, required=True)
    gen_parser.add_argument("--clauses", type=int, required=True)
    gen_parser.add_argument("--planted", action="store_true", help="Guarantee satisfiability")
    gen_parser.add_argument("--seed", type=int, default=None)
    gen_parser.add_argument("--out", required=True)

    return parser


def _solve(args, config) -> int:
    instance = load_instance(args.file)

    if args.engine == "both":
        report = cross_validate(instance, runs=args.runs, seed=args.seed)
        results = [report["deterministic"]] + report["randomized"]
        if args.json:
            print(json.dumps({"agree": report["agree"], "results": [r.to_dict() for r in results]}, indent=2))
        else:
            for result in results:
                print(result)
            print(f"Agree: {report['agree']}")
        return 0

    engine = args.engine or config.get("solver.name")
    options = {"seed": args.seed} if args.seed is not None else {}
    result = solve(instance, engine, **options)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result)
        if result.solution is not None and not result.statistics.get("empty_instance"):
            print("Assignment:", " ".join(str(lit) for lit in result.solution))
        if not result.exact and not result.is_conclusive:
            print("Note: the randomized engine's negative verdict is probabilistic")
    return 0


def _benchmark(args, config) -> int:
    files = []
    for path in args.paths:
        files.extend(find_instance_files(path))

    engines = args.engine or config.get("benchmark.engines")
    out_dir = args.out_dir or config.get("benchmark.results_dir")
    format_type = args.format or config.get("benchmark.format")
    options = {"papadimitriou": {"seed": args.seed}} if args.seed is not None else {}

    structured_logger = create_logger(args.name, output_dir=out_dir, format_type=format_type)
    try:
        summary = run_benchmarks(files, engines, structured_logger, options)
    finally:
        metadata_path = structured_logger.finalize()

    for engine, answer in summary["answers"].items():
        print(f"{engine}: {answer}")
    print(f"\nSaved results to: {os.path.dirname(metadata_path)}")
    return 0


def _generate(args) -> int:
    if args.planted:
        instance, _ = generate_planted_instance(args.vars, args.clauses, seed=args.seed)
    else:
        instance = generate_instance(args.vars, args.clauses, seed=args.seed)
    save_instance(instance, args.out)
    print(f"Wrote {instance!r} to {args.out}")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(
        "DEBUG" if args.debug else config.get("logging.level"),
        log_file=config.get("logging.file"),
        fmt=config.get("logging.format"),
    )
    if args.config:
        SolverRegistry.set_default(config.get("solver.name"))

    try:
        if args.command == "solve":
            return _solve(args, config)
        elif args.command == "benchmark":
            return _benchmark(args, config)
        elif args.command == "generate":
            return _generate(args)
        else:
            parser.print_help()
            return 2
    except (DecisionError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
