# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="theta",
    version="0.1.0",
    packages=find_namespace_packages(include=["theta", "theta.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={"test": ["pytest"]},
    zip_safe=False,
)
