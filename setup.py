"""Setup file for the token service package."""

from setuptools import setup, find_packages

setup(
    name="storyswap-auth",
    version="1.0.0",
    packages=find_packages(include=["storyswap", "storyswap.*"]),
    install_requires=[
        "fastapi>=0.110",
        "python-jose[cryptography]>=3.3",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "time-machine>=2.13",
            "httpx>=0.26",
        ],
    },
    python_requires=">=3.9",
)
