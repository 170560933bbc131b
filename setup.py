from setuptools import find_packages, setup

setup(
    name="gemmkit",
    version="0.1.0",
    description="gemmkit - Dense single-precision GEMM over pluggable CPU backends",
    packages=find_packages(include=["gemmkit", "gemmkit.*"]),
    python_requires=">=3.10",
    install_requires=["numpy", "tabulate", "tqdm"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["gemmkit=gemmkit.cli:main"]},
)
