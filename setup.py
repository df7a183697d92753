from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = [
    "psutil>=5.9.0",
    "requests>=2.32.4",
    "python-dotenv>=1.0.0",
    "rich>=13.0.0",
]

dev_requirements = [
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
]

setup(
    name="hostwatch",
    version="0.1.0",
    author="Hostwatch Team",
    description="Host CPU, memory and disk threshold monitoring with webhook incident alerts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Monitoring",
        "Topic :: System :: Systems Administration",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={"dev": dev_requirements},
    entry_points={
        "console_scripts": [
            "hostwatch=hostwatch.cli:main",
        ],
    },
    include_package_data=True,
)
