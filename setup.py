"""Setup configuration for Cryptocord Discord Bot."""

from setuptools import setup, find_packages

setup(
    name="cryptocord",
    version="0.0.1",
    description="A Discord bot that relays crypto news, posts weather forecasts and runs a word game",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "py-cord>=2.6",
        "python-dotenv",
        "PyYAML",
        "requests",
        "prompt_toolkit",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "cryptocord=cryptocord.main:main",
        ],
    },
)
