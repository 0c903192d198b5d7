import sys
from pathlib import Path
from typing import List, Optional

from app.pipeline.steps import (
    run_input_check_step, run_generator, run_validator, run_formatter,
    is_generation_successful, is_schedule_fully_valid
)

def run_pipeline(pipeline_run_tag: str, seed: Optional[int] = None,
                 data_dir: Optional[Path] = None, output_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Input check -> generation -> validation -> formatted views.
    Returns the generator run directory, or None when generation failed.
    """
    print(f"--- STARTING TIMETABLE PIPELINE: {pipeline_run_tag} ---")
    print(f"CONFIG: Seed = {seed if seed is not None else 'from environment'}")

    try:
        snapshot = run_input_check_step(data_dir)
    except RuntimeError as e:
        print(f"CRITICAL ERROR: Input check failed: {e}")
        return None

    run_dir = run_generator(pipeline_run_tag, snapshot=snapshot, output_dir=output_dir, seed=seed)
    if not is_generation_successful(run_dir):
        print(f"--- FAILED: No feasible timetable. See {run_dir} ---")
        return None

    validation_dir = run_validator(run_dir, snapshot=snapshot)
    if not is_schedule_fully_valid(validation_dir):
        print(f"WARNING: Generated timetable has hard constraint violations. See {validation_dir}")

    run_formatter(run_dir, snapshot=snapshot)

    print(f"\n{'#'*60}\n--- PIPELINE {pipeline_run_tag} FINISHED ---\n{'#'*60}")
    print(f"The timetable and its views can be found in: {run_dir}")
    return run_dir

def parse_seed(args: List[str]) -> Optional[int]:
    """Parses the optional `--seed <int>` that follows the run tag. Raises ValueError on anything else."""
    if not args:
        return None
    if len(args) != 2 or args[0] != '--seed':
        raise ValueError(f"unexpected arguments: {' '.join(args)}")
    try:
        return int(args[1])
    except ValueError:
        raise ValueError(f"--seed expects an integer, got {args[1]!r}")

def print_usage():
    print("Usage:")
    print("  python -m app.pipeline.controller <pipeline_run_tag> [--seed <int>]")
    print("\nExample: python -m app.pipeline.controller fall_term --seed 42")

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print_usage()
    else:
        tag = sys.argv[1]
        try:
            run_seed = parse_seed(sys.argv[2:])
        except ValueError as e:
            print(f"ERROR: {e}")
            print_usage()
            sys.exit(2)

        sys.exit(0 if run_pipeline(tag, seed=run_seed) else 1)
