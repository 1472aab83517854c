# main.py

from pathlib import Path
from subprocess import run


def start(cmmd: list[str]) -> None:
    run(cmmd, check=True)


def main() -> None:
    """Run the API under uvicorn from the project's virtualenv."""
    bin_path = Path(__file__).resolve().parent / ".venv" / "bin"
    cmmd = [
        f"{bin_path / 'uvicorn'}",
        "blog_backend.main:app",
        "--host",
        "127.0.0.1",
        "--port",
        "8000",
        "--reload",
        "--log-level",
        "info",
    ]
    start(cmmd)


if __name__ == "__main__":
    main()
