"""Entry point for python -m structured_reasoning."""


def main() -> None:
    """Run the structured-reasoning CLI application."""
    from structured_reasoning.cli.main import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
