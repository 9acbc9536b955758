import typer

import quran_tracker.cli

if __name__ == "__main__":
    typer_app: typer.Typer = quran_tracker.cli.app
    typer_app()
