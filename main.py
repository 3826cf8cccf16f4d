"""Entry point delegating to the annealing pipeline CLI."""

from simulated_annealing.glue.pipeline import main as pipeline_main


def main() -> None:
    pipeline_main()


if __name__ == "__main__":
    main()
