from setuptools import setup, find_packages

setup(
    name="pydungeon",
    version="0.1.0",
    description="PyDungeon - princess, dragon and knight encounter simulator",
    author="Your Name",
    packages=find_packages(include=["dungeon_core", "dungeon_core.*", "dungeon_engine", "dungeon_engine.*"]),
    include_package_data=True,
    install_requires=[
        # Core data modeling and validation
        "pydantic>=2.0.0",

        # Rule table graph
        "networkx>=3.0",

        # Environment variables
        "python-dotenv>=1.0.0",

        # CLI and rich output
        "typer>=0.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dungeon = dungeon_engine.cli:run",
        ],
    },
    python_requires=">=3.11",
    package_dir={"": "."},
)
