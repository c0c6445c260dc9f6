from setuptools import setup, find_packages

setup(
    name="edci-engine",
    version="1.2.0",    packages=find_packages(include=["edci", "edci.*"]),
    install_requires=[
        "pandas>=2.0",
        "numpy>=1.24",
        "matplotlib>=3.7",
        "reportlab>=4.0",
        "openpyxl>=3.1",
        "python-dateutil>=2.8",
        "PyYAML>=6.0",
        "requests>=2.31",
        "APScheduler>=3.10,<4",
        "watchdog>=3.0",
        "psutil>=5.9"
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": ["edci=edci.cli:main"],
    },
    python_requires=">=3.10",
    description="Emergency Department Congestion Index scoring, polling and reporting engine",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Healthcare Industry",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ]
)
