
from setuptools import setup, find_packages

setup(
    name="multicurve_sensitivities",
    version="0.1.0",
    description="Bump-and-reprice sensitivities of multi-curve zero nodes to market quotes",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
