# setup.py - pure Python package, numpy backs the checker's slot array
from setuptools import setup, find_packages

setup(
    name="zobrist",
    version="0.1.0",
    description="Incremental, order-independent fingerprints for mutable sets",
    packages=find_packages(include=["zobrist", "zobrist.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
