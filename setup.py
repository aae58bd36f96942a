from setuptools import setup, find_packages

setup(
    name="justlog",
    version="0.1.0",
    description="Crash-recoverable workout session tracker w/ a Typer CLI",
    packages=find_packages(include=["justlog", "justlog.*"]),
    install_requires=[
        "typer",
        "rich",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-socket",
        ],
    },
    entry_points={
        "console_scripts": [
            "justlog=justlog.cli:app",
        ],
    },
    python_requires=">=3.11",
)
