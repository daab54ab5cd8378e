"""Setup configuration for LLM categorizer."""

from setuptools import find_packages, setup

setup(
    name="llm-categorizer",
    version="0.1.0",
    description="Recursive LLM-driven categorization of large item collections",
    author="LLM Categorizer Team",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["cli", "config", "example"],
    install_requires=[
        "click>=8.1.0",
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
        "requests>=2.31.0",
        "ollama>=0.4.0",
        "google-generativeai>=0.3.0",
        "tqdm>=4.66.0",
        "coloredlogs>=15.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
        ],
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.5.0",
            "isort>=5.12.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "llm-categorizer=cli:cli",
        ],
    },
)
