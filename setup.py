"""Todo Client - terminal todo list backed by a REST task service."""
from setuptools import setup, find_packages

setup(
    name="todo-client",
    version="1.0.0",
    description="Terminal todo list that syncs with a remote task service",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.1.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
        "toml>=0.10.0",
        "httpx>=0.24.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "todo-client=todo_client.cli:main",
            "todo=todo_client.cli:main",  # Short alias
        ],
    },
    python_requires=">=3.10",
)
