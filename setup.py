from setuptools import setup, find_packages

setup(
    name="ollama-api",
    version="0.1.0",
    description="Typed client for the Ollama HTTP API",
    packages=find_packages(include=["ollama_api", "ollama_api.*"]),
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.25.2",
        "pydantic>=2.5.2",
        "pydantic-settings>=2.1.0",
        "structlog>=23.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.21",
        ],
    },
)
