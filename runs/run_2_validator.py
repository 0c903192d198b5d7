from pathlib import Path
from app.pipeline.steps import run_validator, is_schedule_fully_valid

def main():
    print("--- Hard Constraint Validator Script ---")
    while True:
        path_str = input("Enter path to generator run directory: ")
        run_dir = Path(path_str)
        if (run_dir / "generation_result.json").exists(): break
        print("No generation_result.json in that directory.")

    validation_dir = run_validator(run_dir)
    status = "VALID" if is_schedule_fully_valid(validation_dir) else "VIOLATIONS FOUND"
    print(f"{status}. Report: {validation_dir}")

if __name__ == "__main__":
    main()
