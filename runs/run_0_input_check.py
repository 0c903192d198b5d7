from app.pipeline.steps import run_input_check_step

def main():
    print("--- Input Check ---")
    try:
        run_input_check_step()
    except RuntimeError as e:
        print(f"Input check failed: {e}")
        return
    print("--- Inputs are ready for generation ---")

if __name__ == "__main__":
    main()
