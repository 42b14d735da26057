from setuptools import setup, find_packages

setup(
    name="diskhound",
    version="0.3.0",
    packages=find_packages(include=["diskhound", "diskhound.*"]),
    description="Find the largest subdirectories in a given path.",
    author="Max Carlson",
    author_email="carlsonamax@gmail.com",
    python_requires=">=3.10",
    install_requires=[
        "rich>=13.0",
        "tomli>=2.0; python_version < '3.11'",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "diskhound=diskhound.cli:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
