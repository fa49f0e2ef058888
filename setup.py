from setuptools import setup, find_packages
from pathlib import Path

# Read the requirements from requirements.txt
reqs_path = Path(__file__).parent / "requirements.txt"
requirements = [
    line.strip()
    for line in reqs_path.read_text().splitlines()
    if line.strip() and not line.startswith("#")
]

setup(
    name="hashrun",
    version="0.1.0",
    description="Random test data generation and paced batch hashing",
    author="Sir Wabbit",
    packages=find_packages(include=["hashrun", "hashrun.*"]),
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["hashrun=hashrun.cli:run"]},
)
