from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="ipgeo",
    version="0.1.0",
    description="IPv4 to country lookup from country-ip-blocks or IP2Location data",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["ipgeo", "ipgeo.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.3.0",
        "PyYAML>=5.4",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "ipgeo=ipgeo.cli:main",
        ],
    },
)
