from app.pipeline.steps import run_generator

def main():
    print("--- Generator Runner ---")
    tag = input("Enter run tag: ").strip() or "default"
    seed_str = input("Enter seed (blank = use SCHEDULER_SEED): ").strip()
    seed = int(seed_str) if seed_str.isdigit() else None

    out_dir = run_generator(run_tag=tag, seed=seed)
    print(f"Done. Output: {out_dir}")

if __name__ == "__main__":
    main()
