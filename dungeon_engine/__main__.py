"""CLI entrypoint for PyDungeon.

Usage (after installing editable):
    dungeon shell
    python -m dungeon_engine battle dungeon.txt --range 5
"""

from dungeon_engine.cli import run

if __name__ == "__main__":
    run()
