#!/usr/bin/env python

from setuptools import setup, find_packages

setup(
    name="quake_log_tools",
    version="1.0.0",
    description="Python tools for Quake 3 server log parsing and match statistics",
    author="GeNe FRAG",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"config": ["profiles/*.json", "secrets/*.example"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.25.0",
        "numpy>=1.19.0",
        "pandas>=1.0.0",
        "openpyxl>=3.0.0",
        "matplotlib>=3.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "quake-match-report=quake_log_tools.tools.match_report:main",
            "quake-kill-ranking=quake_log_tools.tools.kill_ranking:main",
            "quake-death-cause-plotter=quake_log_tools.tools.death_cause_plotter:main",
            "quake-download-log=quake_log_tools.log.log_downloader:main",
        ],
    },
)
