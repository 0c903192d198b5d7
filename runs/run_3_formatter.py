from pathlib import Path
from app.pipeline.steps import load_input_snapshot, run_formatter

def main():
    print("--- Timetable Formatter ---")
    run_dir = Path(input("Enter path to generator run directory: ").strip())
    if not run_dir.is_dir():
        print("Invalid directory.")
        return

    out_dir = run_formatter(run_dir, snapshot=load_input_snapshot())
    print(f"Done. Output: {out_dir}")

if __name__ == "__main__":
    main()
