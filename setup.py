# setup.py
from setuptools import setup, find_packages

setup(
    name="monkey",
    version="0.1.0",
    description="Lexer, Pratt parser and tree-walking evaluator for the Monkey language",
    packages=find_packages(include=["monkey", "monkey.*"]),
    package_data={"monkey": ["prelude/*.mk"]},
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
