# setup.py
from setuptools import setup, find_packages

setup(
    name="psil",
    version="0.1.0",
    description="Batch interpreter for Psil, a small typed Lisp",
    packages=find_packages(include=["psil", "psil.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["psil=psil.__main__:main"],
    },
    zip_safe=False,
)
