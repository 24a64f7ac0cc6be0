import sys
from pathlib import Path

# Ensure 'src' is in sys.path
if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def main():
    """Console entry point for the clientforge command."""
    from clientforge.cli.commands import cli
    cli()


if __name__ == "__main__":
    main()
