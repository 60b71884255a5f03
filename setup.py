from setuptools import setup, find_packages

setup(
    name="dreamlog",
    version="0.1.0",
    description="Voice dream journal with dream-sign, clarity and lucidity analysis",
    author="",
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "dreamlog.analysis": ["catalogue.yaml"],
    },
    include_package_data=True,
    install_requires=[
        "rich>=12.5.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dreamlog=dreamlog.main:main",
        ],
    },
)
