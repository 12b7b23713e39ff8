"""
Surface Math Engine - Setup
"""

from setuptools import setup, find_packages

setup(
    name="surface_math",
    version="1.0.0",
    description="Expression evaluation and numerical calculus for surfaces z = f(x, y)",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Programming Language :: Python :: 3",
    ],
)
