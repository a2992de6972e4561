from setuptools import setup, find_packages

setup(
    name="mna_solver",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "networkx",
        "pydantic>=2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mna-solver=mna_solver.run_solver:main",
        ],
    },
    python_requires=">=3.8",
)
