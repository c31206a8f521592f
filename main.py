"""
Entry point for the vocab study client.

Run with:
    python main.py study
    python main.py study --offline
"""
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from src.cli.vocab_cli import run

if __name__ == "__main__":
    run()
