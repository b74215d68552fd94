# setup.py
from setuptools import setup, find_packages

setup(
    name="rule-schema",               # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),  # will find rule_schema/
    install_requires=["pandas"],      # DataFrame arrays + tabular error reports
    python_requires=">=3.9",
    description="Declarative rule-set validation producing shape-mirroring error trees",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
