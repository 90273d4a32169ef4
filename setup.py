from setuptools import setup, find_packages

setup(
    name="qparas",
    version="0.1.0",
    description="Query the Paras.id marketplace API and print JSON",
    packages=find_packages(include=["qparas", "qparas.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.2",
        "requests>=2.31.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "requests-mock>=1.11",
            "pytest-socket>=0.6",
        ],
    },
    entry_points={
        "console_scripts": ["qparas=qparas.cli:main"],
    },
    license="MIT",
)
